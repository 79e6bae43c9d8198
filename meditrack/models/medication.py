"""
Domain models for medications and reminders.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from meditrack.core.datetime_utils import clock_string, date_string, local_now


@dataclass(frozen=True)
class Medication:
    """A prescribed medication. All fields are free text."""

    name: str
    dosage: str
    schedule: str

    def summary(self) -> str:
        return f"Medication: {self.name} | Dosage: {self.dosage} | Schedule: {self.schedule}"


@dataclass(frozen=True)
class Reminder:
    """
    A dated reminder.

    Attributes:
        message: Free-text reminder message.
        date: Zero-padded 'YYYY-MM-DD'.
        time: Zero-padded 24-hour 'HH:MM'.
    """

    message: str
    date: str
    time: str

    def is_due(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the reminder is due.

        Due means it is dated today and its time has been reached. Both formats
        are fixed-width, so plain string comparison orders them correctly.

        Args:
            now: Moment to check against. Defaults to the local wall clock.
        """
        now = now or local_now()
        return self.date == date_string(now) and self.time <= clock_string(now)

    def summary(self) -> str:
        return f"Reminder: {self.message} on {self.date} at {self.time}"
