"""
Domain models for MediTrack.

This module contains the health record variants and the patient aggregate.
"""
from meditrack.models.health_record import (
    Alert,
    BloodPressure,
    BloodSugar,
    HealthRecord,
    RecordType,
    Weight,
)
from meditrack.models.medication import Medication, Reminder
from meditrack.models.patient import Patient

__all__ = [
    "Alert",
    "BloodPressure",
    "BloodSugar",
    "HealthRecord",
    "RecordType",
    "Weight",
    "Medication",
    "Reminder",
    "Patient",
]
