"""
Tests for PatientService: entry validation, lookup, reminders and persistence.
"""
from datetime import datetime

import pytest

from meditrack.core.exceptions import InvalidRecordDataError, PatientNotFoundError
from meditrack.models import BloodPressure, BloodSugar, Medication, Reminder, Weight
from meditrack.schemas import BloodPressureCreate, PatientCreate
from meditrack.services import PatientService
from meditrack.storage import FlatFileStore


@pytest.fixture
def service(flat_file_store):
    """PatientService over an empty flat-file store."""
    return PatientService(store=flat_file_store)


@pytest.fixture
def populated_service(service):
    service.add_patient({"name": "Alice", "age": 34, "contact": "alice@example.com"})
    service.add_patient({"name": "Bob", "age": 61})
    return service


# =============================================================================
# TESTS: Patients
# =============================================================================

def test_add_patient_appends(service):
    patient = service.add_patient({"name": "  John Doe ", "age": 50, "contact": "555"})

    assert patient.name == "John Doe"
    assert service.roster == [patient]
    assert patient.records == []


def test_add_patient_accepts_schema_instance(service):
    service.add_patient(PatientCreate(name="Jane", age=41))
    assert service.get_patient(1).contact == ""


@pytest.mark.parametrize("data", [
    {"name": "Bad|Name", "age": 30},
    {"name": "Line\nBreak", "age": 30},
    {"name": "", "age": 30},
    {"name": "Old", "age": 151},
    {"name": "Negative", "age": -1},
    {"name": "NoAge"},
    {"name": "Ok", "age": 30, "contact": "a|b"},
])
def test_add_patient_rejects_invalid_data(service, data):
    with pytest.raises(InvalidRecordDataError) as exc_info:
        service.add_patient(data)

    assert exc_info.value.context["errors"]
    assert service.roster == []


def test_get_patient_is_one_based(populated_service):
    assert populated_service.get_patient(1).name == "Alice"
    assert populated_service.get_patient(2).name == "Bob"


@pytest.mark.parametrize("position", [True, False, 1.0])
def test_get_patient_rejects_non_int_positions(populated_service, position):
    with pytest.raises(PatientNotFoundError):
        populated_service.get_patient(position)


@pytest.mark.parametrize("position", [0, 3, -1])
def test_get_patient_out_of_range(populated_service, position):
    with pytest.raises(PatientNotFoundError) as exc_info:
        populated_service.get_patient(position)

    assert exc_info.value.detail == f"No patient at position {position}"


def test_list_patients(populated_service):
    assert populated_service.list_patients() == ["1. Alice", "2. Bob"]


# =============================================================================
# TESTS: Records, medications, reminders
# =============================================================================

def test_add_record_variants(populated_service):
    bp = populated_service.add_record(1, {"record_type": "BP", "systolic": 120, "diastolic": 80})
    weight = populated_service.add_record(1, {"record_type": "Weight", "kilograms": 72.5})
    sugar = populated_service.add_record(1, {"record_type": "Sugar", "mg_per_dl": 95})

    assert isinstance(bp, BloodPressure)
    assert isinstance(weight, Weight)
    assert isinstance(sugar, BloodSugar)
    assert populated_service.get_patient(1).records == [bp, weight, sugar]
    assert populated_service.get_patient(2).records == []


def test_add_record_accepts_schema_instance(populated_service):
    record = populated_service.add_record(2, BloodPressureCreate(systolic=150, diastolic=95))
    assert record.systolic == 150


@pytest.mark.parametrize("data", [
    {"record_type": "Cholesterol", "value": 190},
    {"record_type": "BP", "systolic": 120},
    {"record_type": "Weight", "kilograms": 0},
    {"record_type": "Sugar", "mg_per_dl": "high"},
    {"record_type": "Sugar", "mg_per_dl": float("inf")},
    {"record_type": "Sugar", "mg_per_dl": float("nan")},
    {"record_type": "Weight", "kilograms": float("inf")},
    {"systolic": 120, "diastolic": 80},
])
def test_add_record_rejects_invalid_data(populated_service, data):
    with pytest.raises(InvalidRecordDataError):
        populated_service.add_record(1, data)
    assert populated_service.get_patient(1).records == []


def test_add_record_to_missing_patient(populated_service):
    with pytest.raises(PatientNotFoundError):
        populated_service.add_record(5, {"record_type": "Weight", "kilograms": 70})


def test_add_medication(populated_service):
    medication = populated_service.add_medication(
        1, {"name": "Metformin", "dosage": "500mg", "schedule": "Twice a day"}
    )
    assert medication == Medication("Metformin", "500mg", "Twice a day")
    assert populated_service.get_patient(1).medications == [medication]


def test_add_medication_rejects_delimiter(populated_service):
    with pytest.raises(InvalidRecordDataError):
        populated_service.add_medication(1, {"name": "Met|formin"})


def test_add_reminder(populated_service):
    reminder = populated_service.add_reminder(
        2, {"message": "Blood test", "date": "2025-03-10", "time": "08:15"}
    )
    assert reminder == Reminder("Blood test", "2025-03-10", "08:15")


@pytest.mark.parametrize("date, time", [
    ("2025-02-30", "08:00"),    # not a real day
    ("2025-3-10", "08:00"),     # not zero padded
    ("2025-03-10", "8:00"),
    ("2025-03-10", "24:00"),
    ("10/03/2025", "08:00"),
])
def test_add_reminder_rejects_bad_date_or_time(populated_service, date, time):
    with pytest.raises(InvalidRecordDataError):
        populated_service.add_reminder(1, {"message": "x", "date": date, "time": time})


def test_due_reminders_sweep(populated_service):
    now = datetime(2025, 3, 10, 14, 30)
    populated_service.add_reminder(1, {"message": "Morning", "date": "2025-03-10", "time": "08:00"})
    populated_service.add_reminder(1, {"message": "Tomorrow", "date": "2025-03-11", "time": "08:00"})
    populated_service.add_reminder(2, {"message": "Lunch", "date": "2025-03-10", "time": "12:00"})

    due = populated_service.due_reminders(now)

    assert [(patient.name, reminder.message) for patient, reminder in due] == [
        ("Alice", "Morning"),
        ("Bob", "Lunch"),
    ]


# =============================================================================
# TESTS: Profile rendering
# =============================================================================

def test_render_profile_empty_sections(populated_service):
    profile = populated_service.render_profile(populated_service.get_patient(2))

    assert "Name: Bob" in profile
    assert "Age: 61" in profile
    assert "No health records found." in profile
    assert "No medications found." in profile
    assert "No reminders found." in profile


def test_render_profile_lists_children(populated_service):
    populated_service.add_record(1, {"record_type": "BP", "systolic": 150, "diastolic": 95})
    populated_service.add_medication(1, {"name": "Lisinopril", "dosage": "10mg", "schedule": "Morning"})

    profile = populated_service.render_profile(populated_service.get_patient(1))

    assert "150/95 mmHg  <-- ALERT: High Blood Pressure!" in profile
    assert "Medication: Lisinopril | Dosage: 10mg | Schedule: Morning" in profile
    assert "No health records found." not in profile


# =============================================================================
# TESTS: Persistence
# =============================================================================

def test_save_and_reload(populated_service, flat_file_store):
    populated_service.add_record(1, {"record_type": "Weight", "kilograms": 72.5})
    assert populated_service.save() is True

    fresh = PatientService(store=flat_file_store)
    fresh.load()

    assert fresh.roster == populated_service.roster


def test_failed_save_keeps_roster(tmp_path, caplog):
    service = PatientService(store=FlatFileStore(str(tmp_path)))
    service.add_patient({"name": "Alice", "age": 34})

    assert service.save() is False
    assert [p.name for p in service.roster] == ["Alice"]
    assert "failed" in caplog.text


def test_load_replaces_roster(populated_service):
    populated_service.load()
    assert populated_service.roster == []


def test_health_service_is_available(populated_service):
    populated_service.add_record(1, {"record_type": "Weight", "kilograms": 81})
    result = populated_service.health.compute_bmi(populated_service.get_patient(1), 1.8)
    assert result.bmi == pytest.approx(25.0)
