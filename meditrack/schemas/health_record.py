"""
Pydantic schemas for health record entry.

``HealthRecordCreate`` is a discriminated union keyed on ``record_type``
(BP, Weight, Sugar), so a single raw dict from the menu layer validates into
the right variant:

    record = HEALTH_RECORD_ADAPTER.validate_python(
        {"record_type": "BP", "systolic": 120, "diastolic": 80}
    ).to_model()
"""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from meditrack.models.health_record import BloodPressure, BloodSugar, Weight


class BloodPressureCreate(BaseModel):
    """Schema for a blood pressure reading in mmHg."""

    record_type: Literal["BP"] = "BP"
    systolic: int = Field(..., ge=0, description="Systolic pressure (mmHg)", examples=[120])
    diastolic: int = Field(..., ge=0, description="Diastolic pressure (mmHg)", examples=[80])

    def to_model(self) -> BloodPressure:
        return BloodPressure(systolic=self.systolic, diastolic=self.diastolic)


class WeightCreate(BaseModel):
    """Schema for a weight measurement in kilograms."""

    record_type: Literal["Weight"] = "Weight"
    kilograms: float = Field(..., gt=0, allow_inf_nan=False, description="Body weight (kg)", examples=[72.5])

    def to_model(self) -> Weight:
        return Weight(kilograms=self.kilograms)


class BloodSugarCreate(BaseModel):
    """Schema for a blood sugar reading in mg/dL."""

    record_type: Literal["Sugar"] = "Sugar"
    mg_per_dl: float = Field(..., ge=0, allow_inf_nan=False, description="Blood glucose (mg/dL)", examples=[95.0])

    def to_model(self) -> BloodSugar:
        return BloodSugar(mg_per_dl=self.mg_per_dl)


HealthRecordCreate = Annotated[
    Union[BloodPressureCreate, WeightCreate, BloodSugarCreate],
    Field(discriminator="record_type"),
]

HEALTH_RECORD_ADAPTER: TypeAdapter = TypeAdapter(HealthRecordCreate)
