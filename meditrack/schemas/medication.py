"""
Pydantic schemas for medication and reminder entry.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from meditrack.models.medication import Medication, Reminder
from meditrack.schemas.validators import DelimitedText, check_calendar_date


class MedicationCreate(BaseModel):
    """Schema for adding a medication. Dosage and schedule are free text."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: DelimitedText = Field(..., min_length=1, max_length=200, examples=["Metformin"])
    dosage: DelimitedText = Field("", max_length=100, examples=["500mg"])
    schedule: DelimitedText = Field("", max_length=200, examples=["Twice a day"])

    def to_model(self) -> Medication:
        return Medication(name=self.name, dosage=self.dosage, schedule=self.schedule)


class ReminderCreate(BaseModel):
    """Schema for adding a reminder.

    Date and time must be zero-padded (``YYYY-MM-DD`` and 24-hour ``HH:MM``)
    because due checks compare them as strings.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    message: DelimitedText = Field(..., min_length=1, max_length=500, examples=["Take evening dose"])
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", examples=["2025-01-01"])
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$", examples=["20:30"])

    @field_validator("date")
    @classmethod
    def _real_date(cls, value: str) -> str:
        return check_calendar_date(value)

    def to_model(self) -> Reminder:
        return Reminder(message=self.message, date=self.date, time=self.time)
