"""
Service layer for derived health metrics.

This service computes BMI from a patient's most recently added weight and
builds per-type trend reports. It never mutates the patient.

Architecture:
    Menu → HealthService → Patient aggregate
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List

from meditrack.core.exceptions import InvalidHeightError, NoWeightRecordError
from meditrack.models.health_record import RecordType
from meditrack.models.patient import Patient

logger = logging.getLogger(__name__)


class BmiCategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESITY = "Obesity"


@dataclass(frozen=True)
class BmiResult:
    """Outcome of a BMI calculation."""

    weight_kg: float
    height_m: float
    bmi: float
    category: BmiCategory


def classify_bmi(bmi: float) -> BmiCategory:
    """
    Map a BMI value to its category.

    <18.5 Underweight, [18.5, 25) Normal weight, [25, 30) Overweight, >=30 Obesity.
    """
    if bmi < 18.5:
        return BmiCategory.UNDERWEIGHT
    if bmi < 25:
        return BmiCategory.NORMAL
    if bmi < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESITY


def calculate_bmi(weight_kg: float, height_m: float) -> float:
    """
    Compute BMI as weight / height².

    Raises:
        InvalidHeightError: If the height is not a positive finite number.
    """
    if not (height_m > 0 and math.isfinite(height_m)):
        raise InvalidHeightError(height=height_m)
    return weight_kg / (height_m * height_m)


class HealthService:
    """
    Service layer for BMI and trend reports.

    "No weight record" and "invalid height" are raised as distinct exceptions
    so the menu can tell the user which one happened.
    """

    def compute_bmi(self, patient: Patient, height_m: float) -> BmiResult:
        """
        Calculate BMI from the patient's most recently added weight.

        Args:
            patient: The patient to compute for.
            height_m: Height in meters.

        Returns:
            BmiResult: Weight used, height, BMI and category.

        Raises:
            NoWeightRecordError: If the patient has no weight record.
            InvalidHeightError: If height_m <= 0.
        """
        weight = patient.latest_weight()
        if weight is None:
            logger.info(f"BMI declined for {patient.name}: no weight records")
            raise NoWeightRecordError(patient_name=patient.name)

        bmi = calculate_bmi(weight, height_m)
        category = classify_bmi(bmi)
        logger.debug(f"BMI for {patient.name}: {bmi:.2f} ({category.value})")
        return BmiResult(weight_kg=weight, height_m=height_m, bmi=bmi, category=category)

    def trend_report(self, patient: Patient, kind: RecordType) -> List[str]:
        """
        Get the summary lines of one record type, in insertion order.

        Returns:
            List[str]: One line per matching record. Empty if none match.
        """
        return [record.summary() for record in patient.filter_by_type(kind)]
