"""
Service layer for MediTrack business logic.
"""
from meditrack.services.health_service import (
    BmiCategory,
    BmiResult,
    HealthService,
    calculate_bmi,
    classify_bmi,
)
from meditrack.services.patient_service import PatientService

__all__ = [
    "BmiCategory",
    "BmiResult",
    "HealthService",
    "calculate_bmi",
    "classify_bmi",
    "PatientService",
]
