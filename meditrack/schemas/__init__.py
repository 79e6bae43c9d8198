"""
Pydantic schemas for validating entered data.

This module contains all Pydantic models used at the menu boundary.
"""
from meditrack.schemas.patient import PatientCreate
from meditrack.schemas.health_record import (
    BloodPressureCreate,
    WeightCreate,
    BloodSugarCreate,
    HealthRecordCreate,
    HEALTH_RECORD_ADAPTER,
)
from meditrack.schemas.medication import MedicationCreate, ReminderCreate

__all__ = [
    # Patient schemas
    "PatientCreate",
    # Health record schemas
    "BloodPressureCreate",
    "WeightCreate",
    "BloodSugarCreate",
    "HealthRecordCreate",
    "HEALTH_RECORD_ADAPTER",
    # Medication / reminder schemas
    "MedicationCreate",
    "ReminderCreate",
]
