"""
Domain model for patients.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from meditrack.core.datetime_utils import local_now
from meditrack.models.health_record import HealthRecord, RecordType
from meditrack.models.medication import Medication, Reminder


@dataclass
class Patient:
    """
    Model representing one patient and everything recorded for them.

    The patient owns its three child lists. They are append-only and keep
    insertion order, which is the only ordering records have.
    """

    name: str
    age: int
    contact: str
    records: List[HealthRecord] = field(default_factory=list)
    medications: List[Medication] = field(default_factory=list)
    reminders: List[Reminder] = field(default_factory=list)

    def add_record(self, record: HealthRecord) -> None:
        self.records.append(record)

    def add_medication(self, medication: Medication) -> None:
        self.medications.append(medication)

    def add_reminder(self, reminder: Reminder) -> None:
        self.reminders.append(reminder)

    def latest_weight(self) -> Optional[float]:
        """
        Get the kilograms value of the most recently added weight record.

        Insertion order decides, not the capture timestamp.

        Returns:
            Optional[float]: The weight, or None if no weight record exists.
        """
        for record in reversed(self.records):
            if record.kind is RecordType.WEIGHT:
                return record.kilograms
        return None

    def filter_by_type(self, kind: RecordType) -> List[HealthRecord]:
        """Get the records of one type, in insertion order (possibly empty)."""
        kind = RecordType(kind)
        return [record for record in self.records if record.kind is kind]

    def due_reminders(self, now: Optional[datetime] = None) -> List[Reminder]:
        """Get the reminders due at ``now`` (defaults to the local wall clock)."""
        now = now or local_now()
        return [reminder for reminder in self.reminders if reminder.is_due(now)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the patient header to a dictionary for log context."""
        return {
            "name": self.name,
            "age": self.age,
            "contact": self.contact,
            "records": len(self.records),
            "medications": len(self.medications),
            "reminders": len(self.reminders),
        }

    @classmethod
    def from_row(cls, row: tuple) -> 'Patient':
        """
        Create a Patient from a database row tuple.

        Args:
            row: Tuple of (name, age, contact) from a patients query.

        Returns:
            Patient instance with empty child lists.
        """
        name, age, contact = row
        return cls(
            name=name,
            age=int(age) if age is not None else 0,
            contact=contact if contact is not None else "",
        )
