"""
Domain model for health measurements.

A health record is exactly one of three variants, each tagged with a
RecordType. The tag vocabulary is closed: storage codecs and trend filters
match on ``record.kind`` rather than on class identity.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Dict, Optional, Union

from meditrack.core.datetime_utils import capture_now, format_local


class RecordType(str, Enum):
    """Type tag shared by the flat-file and relational backends."""

    BLOOD_PRESSURE = "BP"
    WEIGHT = "Weight"
    BLOOD_SUGAR = "Sugar"


class Alert(str, Enum):
    HIGH = "High"
    LOW = "Low"


# Clinical thresholds (fixed policy)
BP_HIGH_SYSTOLIC = 140
BP_HIGH_DIASTOLIC = 90
BP_LOW_SYSTOLIC = 90
BP_LOW_DIASTOLIC = 60
SUGAR_HIGH = 126.0
SUGAR_LOW = 70.0

_ALERT_TEXT: Dict[RecordType, Dict[Alert, str]] = {
    RecordType.BLOOD_PRESSURE: {
        Alert.HIGH: "High Blood Pressure!",
        Alert.LOW: "Low Blood Pressure!",
    },
    RecordType.BLOOD_SUGAR: {
        Alert.HIGH: "High Blood Sugar (Potential Diabetes)!",
        Alert.LOW: "Low Blood Sugar (Hypoglycemia)!",
    },
}


def _with_alert(kind: RecordType, line: str, alert: Optional[Alert]) -> str:
    if alert is None:
        return line
    return f"{line}  <-- ALERT: {_ALERT_TEXT[kind][alert]}"


@dataclass(frozen=True)
class BloodPressure:
    """Blood pressure reading in mmHg."""

    systolic: int
    diastolic: int
    captured_at: datetime = field(default_factory=capture_now)

    kind: ClassVar[RecordType] = RecordType.BLOOD_PRESSURE

    def alert(self) -> Optional[Alert]:
        # High is checked first and wins on overlap
        if self.systolic >= BP_HIGH_SYSTOLIC or self.diastolic >= BP_HIGH_DIASTOLIC:
            return Alert.HIGH
        if self.systolic <= BP_LOW_SYSTOLIC or self.diastolic <= BP_LOW_DIASTOLIC:
            return Alert.LOW
        return None

    def summary(self) -> str:
        line = (
            f"{format_local(self.captured_at)} - Blood Pressure: "
            f"{self.systolic}/{self.diastolic} mmHg"
        )
        return _with_alert(self.kind, line, self.alert())


@dataclass(frozen=True)
class Weight:
    """Body weight in kilograms."""

    kilograms: float
    captured_at: datetime = field(default_factory=capture_now)

    kind: ClassVar[RecordType] = RecordType.WEIGHT

    def alert(self) -> Optional[Alert]:
        return None

    def summary(self) -> str:
        return f"{format_local(self.captured_at)} - Weight: {self.kilograms:g} kg"


@dataclass(frozen=True)
class BloodSugar:
    """Blood glucose in mg/dL."""

    mg_per_dl: float
    captured_at: datetime = field(default_factory=capture_now)

    kind: ClassVar[RecordType] = RecordType.BLOOD_SUGAR

    def alert(self) -> Optional[Alert]:
        if self.mg_per_dl >= SUGAR_HIGH:
            return Alert.HIGH
        if self.mg_per_dl < SUGAR_LOW:
            return Alert.LOW
        return None

    def summary(self) -> str:
        line = f"{format_local(self.captured_at)} - Blood Sugar: {self.mg_per_dl:g} mg/dL"
        return _with_alert(self.kind, line, self.alert())


HealthRecord = Union[BloodPressure, Weight, BloodSugar]
