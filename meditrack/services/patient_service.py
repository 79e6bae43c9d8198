"""
Service layer for roster operations.

This service owns the in-memory roster for a session. The menu layer calls
it to register patients, look them up by their 1-based list position, append
records, medications and reminders, check due reminders, and save or reload
through the configured store.

Architecture:
    Menu → PatientService → RosterStore (flat file or SQLite)

Dependency Injection:
    PatientService receives its store via constructor injection.
    Use core.dependencies.get_patient_service() to build one.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError

from meditrack.core.datetime_utils import local_now
from meditrack.core.exceptions import InvalidRecordDataError, PatientNotFoundError
from meditrack.models.health_record import HealthRecord
from meditrack.models.medication import Medication, Reminder
from meditrack.models.patient import Patient
from meditrack.schemas import (
    HEALTH_RECORD_ADAPTER,
    MedicationCreate,
    PatientCreate,
    ReminderCreate,
)
from meditrack.services.health_service import HealthService
from meditrack.storage.base import Roster, RosterStore

logger = logging.getLogger(__name__)

EntryData = Union[BaseModel, Dict[str, Any]]


def _validation_detail(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "input"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class PatientService:
    """
    Service layer for patient roster operations.

    Handles validation of entered data, 1-based patient lookup and
    coordination with the roster store.
    """

    def __init__(self, store: RosterStore, health_service: Optional[HealthService] = None):
        """
        Initialize the patient service.

        Args:
            store: RosterStore used by load() and save().
            health_service: HealthService for BMI and trends. Created if not given.
        """
        self._store = store
        self.health = health_service or HealthService()
        self.roster: Roster = []

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> Roster:
        """Replace the in-memory roster with the stored one."""
        self.roster = self._store.load_roster()
        return self.roster

    def save(self) -> bool:
        """
        Persist the whole roster.

        Returns:
            bool: True if saved. On False the in-memory roster is unchanged.
        """
        saved = self._store.save_roster(self.roster)
        if not saved:
            logger.warning(
                f"Save to {self._store.location} failed; "
                f"{len(self.roster)} patient(s) kept in memory"
            )
        return saved

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate(schema, data: EntryData):
        if isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            if isinstance(schema, type):
                return schema.model_validate(data)
            return schema.validate_python(data)
        except ValidationError as e:
            raise InvalidRecordDataError(detail=_validation_detail(e), errors=e.errors()) from e

    # -------------------------------------------------------------------------
    # Patients
    # -------------------------------------------------------------------------

    def add_patient(self, data: EntryData) -> Patient:
        """
        Register a new patient at the end of the roster.

        Raises:
            InvalidRecordDataError: If the entered data fails validation.
        """
        patient = self._validate(PatientCreate, data).to_model()
        self.roster.append(patient)
        logger.info(f"Patient '{patient.name}' added at position {len(self.roster)}")
        return patient

    def get_patient(self, position: int) -> Patient:
        """
        Get a patient by 1-based list position.

        Raises:
            PatientNotFoundError: If the position is outside the roster.
        """
        # bool is an int subclass; True must not address patient 1
        if isinstance(position, bool) or not isinstance(position, int):
            raise PatientNotFoundError(position=position)
        if not 1 <= position <= len(self.roster):
            raise PatientNotFoundError(position=position)
        return self.roster[position - 1]

    def list_patients(self) -> List[str]:
        """Get numbered roster lines, e.g. '1. John Doe'."""
        return [f"{index}. {patient.name}" for index, patient in enumerate(self.roster, 1)]

    # -------------------------------------------------------------------------
    # Appending to a patient
    # -------------------------------------------------------------------------

    def add_record(self, position: int, data: EntryData) -> HealthRecord:
        """
        Validate and append a health record to the patient at ``position``.

        Args:
            position: 1-based roster position.
            data: A record schema instance or a dict with a ``record_type`` of
                BP, Weight or Sugar and the matching fields.
        """
        patient = self.get_patient(position)
        record = self._validate(HEALTH_RECORD_ADAPTER, data).to_model()
        patient.add_record(record)
        logger.debug(f"Added {record.kind.value} record for {patient.name}")
        return record

    def add_medication(self, position: int, data: EntryData) -> Medication:
        patient = self.get_patient(position)
        medication = self._validate(MedicationCreate, data).to_model()
        patient.add_medication(medication)
        return medication

    def add_reminder(self, position: int, data: EntryData) -> Reminder:
        patient = self.get_patient(position)
        reminder = self._validate(ReminderCreate, data).to_model()
        patient.add_reminder(reminder)
        return reminder

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def due_reminders(self, now: Optional[datetime] = None) -> List[Tuple[Patient, Reminder]]:
        """
        Sweep the roster for due reminders, evaluated once against ``now``.

        Returns:
            List of (patient, reminder) pairs in roster order.
        """
        now = now or local_now()
        return [
            (patient, reminder)
            for patient in self.roster
            for reminder in patient.due_reminders(now)
        ]

    def render_profile(self, patient: Patient) -> str:
        """Render the patient profile block shown by the menu."""
        lines = [
            "--- Patient Profile ---",
            f"Name: {patient.name}",
            f"Age: {patient.age}",
            f"Contact: {patient.contact}",
            "",
            "--- Health Records ---",
        ]
        lines.extend(
            [record.summary() for record in patient.records] or ["No health records found."]
        )
        lines.extend(["", "--- Medications ---"])
        lines.extend(
            [medication.summary() for medication in patient.medications] or ["No medications found."]
        )
        lines.extend(["", "--- Reminders ---"])
        lines.extend(
            [reminder.summary() for reminder in patient.reminders] or ["No reminders found."]
        )
        return "\n".join(lines)
