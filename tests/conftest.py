"""
Shared pytest fixtures for MediTrack tests.

Key patterns:

1. Store Isolation: Each test gets a fresh temporary database or roster file
2. Backend Parametrization: The ``store`` fixture runs a test once per backend
3. Fixed Timestamps: Sample records carry explicit UTC capture timestamps so
   round trips can be compared exactly

Fixture Hierarchy:
    temp_db_path → sqlite_store ┐
    tmp_path → flat_file_store  ┴→ store (parametrized)
"""
import os
import tempfile
from datetime import datetime, timezone

import pytest

from meditrack.core.config import get_settings
from meditrack.core.dependencies import reset_store
from meditrack.models import (
    BloodPressure,
    BloodSugar,
    Medication,
    Patient,
    Reminder,
    Weight,
)
from meditrack.storage import Database, FlatFileStore, SQLiteStore


def ts(day: int, hour: int = 9, minute: int = 0) -> datetime:
    """UTC capture timestamp in January 2024."""
    return datetime(2024, 1, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def temp_db_path():
    """
    Create a temporary database file path for testing.

    The file is removed after the test, ensuring complete isolation.
    """
    fd, db_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sqlite_store(temp_db_path):
    """Create a SQLiteStore over a fresh temporary database."""
    return SQLiteStore(Database(db_path=temp_db_path))


@pytest.fixture
def flat_file_store(tmp_path):
    """Create a FlatFileStore writing into the test's temp directory."""
    return FlatFileStore(str(tmp_path / "meditrack_data.txt"))


@pytest.fixture(params=["file", "sqlite"])
def store(request):
    """Run the test once against each backend."""
    if request.param == "file":
        return request.getfixturevalue("flat_file_store")
    return request.getfixturevalue("sqlite_store")


@pytest.fixture
def sample_roster():
    """Two patients with records, medications and reminders."""
    alice = Patient(name="Alice Smith", age=34, contact="alice@example.com")
    alice.add_record(BloodPressure(systolic=120, diastolic=80, captured_at=ts(15, 10, 30)))
    alice.add_record(Weight(kilograms=72.5, captured_at=ts(15, 10, 31)))
    alice.add_record(BloodSugar(mg_per_dl=130.4, captured_at=ts(16)))
    # Appended later but captured earlier
    alice.add_record(Weight(kilograms=70.1, captured_at=ts(2)))
    alice.add_medication(Medication(name="Metformin", dosage="500mg", schedule="Twice a day"))
    alice.add_medication(Medication(name="Lisinopril", dosage="10mg", schedule="Morning"))
    alice.add_reminder(Reminder(message="Blood test", date="2024-02-01", time="08:15"))

    bob = Patient(name="Bob Jones", age=61, contact="555-0199")
    bob.add_record(BloodPressure(systolic=150, diastolic=95, captured_at=ts(20, 7, 5)))
    bob.add_reminder(Reminder(message="Evening dose", date="2024-01-20", time="21:00"))
    bob.add_reminder(Reminder(message="Call clinic", date="2024-01-21", time="09:30"))

    carol = Patient(name="Carol White", age=0, contact="")

    return [alice, bob, carol]


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """
    Point settings at the temp directory and reset cached settings/store.
    """
    for name in list(os.environ):
        if name.startswith("MEDITRACK_") or name in ("LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MEDITRACK_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    reset_store()

    yield tmp_path

    get_settings.cache_clear()
    reset_store()
