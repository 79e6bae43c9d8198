"""
Unit tests for the health record variants, medications and reminders.

Tests cover:
- Alert thresholds for blood pressure and blood sugar
- Summary lines with alert annotations
- Capture timestamp defaults
- Reminder due checks
"""
from datetime import datetime, timezone

import pytest

from meditrack.models import (
    Alert,
    BloodPressure,
    BloodSugar,
    Medication,
    RecordType,
    Reminder,
    Weight,
)


# =============================================================================
# TESTS: Alert thresholds
# =============================================================================

@pytest.mark.parametrize("systolic, diastolic, expected", [
    (139, 89, None),
    (140, 89, Alert.HIGH),
    (139, 90, Alert.HIGH),
    (120, 80, None),
    (90, 60, Alert.LOW),
    (91, 61, None),
    (90, 75, Alert.LOW),
    (110, 60, Alert.LOW),
    # High is checked first
    (150, 55, Alert.HIGH),
])
def test_blood_pressure_alert(systolic, diastolic, expected):
    """Test blood pressure alert thresholds."""
    assert BloodPressure(systolic, diastolic).alert() == expected


@pytest.mark.parametrize("value, expected", [
    (125.9, None),
    (126.0, Alert.HIGH),
    (200.0, Alert.HIGH),
    (70.0, None),
    (69.9, Alert.LOW),
    (95.0, None),
])
def test_blood_sugar_alert(value, expected):
    """Test blood sugar alert thresholds."""
    assert BloodSugar(value).alert() == expected


def test_weight_never_alerts():
    assert Weight(250.0).alert() is None
    assert Weight(30.0).alert() is None


# =============================================================================
# TESTS: Summaries
# =============================================================================

def test_blood_pressure_summary_with_high_alert():
    summary = BloodPressure(150, 95).summary()
    assert "Blood Pressure: 150/95 mmHg" in summary
    assert summary.endswith("<-- ALERT: High Blood Pressure!")


def test_blood_pressure_summary_with_low_alert():
    summary = BloodPressure(85, 55).summary()
    assert summary.endswith("<-- ALERT: Low Blood Pressure!")


def test_normal_reading_has_no_alert():
    assert "ALERT" not in BloodPressure(120, 80).summary()
    assert "ALERT" not in BloodSugar(100.0).summary()


def test_blood_sugar_summary_alerts():
    assert "High Blood Sugar (Potential Diabetes)!" in BloodSugar(140.0).summary()
    assert "Low Blood Sugar (Hypoglycemia)!" in BloodSugar(60.0).summary()


def test_weight_summary():
    summary = Weight(72.5).summary()
    assert "Weight: 72.5 kg" in summary
    assert "ALERT" not in summary


def test_summary_starts_with_timestamp():
    summary = Weight(70.0).summary()
    # "YYYY-MM-DD HH:MM - ..."
    assert summary[4] == "-" and summary[13] == ":"
    assert summary[16:19] == " - "


# =============================================================================
# TESTS: Tags and timestamps
# =============================================================================

def test_variant_tags():
    assert BloodPressure(120, 80).kind is RecordType.BLOOD_PRESSURE
    assert Weight(70.0).kind is RecordType.WEIGHT
    assert BloodSugar(95.0).kind is RecordType.BLOOD_SUGAR
    assert [t.value for t in RecordType] == ["BP", "Weight", "Sugar"]


def test_new_record_captures_current_utc_second():
    before = datetime.now(timezone.utc).replace(microsecond=0)
    record = Weight(70.0)
    after = datetime.now(timezone.utc)

    assert record.captured_at.tzinfo is not None
    assert record.captured_at.microsecond == 0
    assert before <= record.captured_at <= after


def test_explicit_timestamp_is_kept():
    captured = datetime(2020, 5, 1, 8, 0, tzinfo=timezone.utc)
    assert BloodSugar(90.0, captured_at=captured).captured_at == captured


def test_records_are_immutable():
    record = BloodPressure(120, 80)
    with pytest.raises(AttributeError):
        record.systolic = 130


# =============================================================================
# TESTS: Medications and reminders
# =============================================================================

def test_medication_summary():
    medication = Medication("Metformin", "500mg", "Twice a day")
    assert medication.summary() == "Medication: Metformin | Dosage: 500mg | Schedule: Twice a day"


def test_reminder_summary():
    reminder = Reminder("Blood test", "2025-03-10", "08:15")
    assert reminder.summary() == "Reminder: Blood test on 2025-03-10 at 08:15"


NOW = datetime(2025, 3, 10, 14, 30)


@pytest.mark.parametrize("date, time, expected", [
    ("2025-03-10", "14:30", True),    # exactly now
    ("2025-03-10", "09:00", True),    # earlier today
    ("2025-03-10", "14:31", False),   # one minute later
    ("2025-03-10", "23:59", False),
    ("2025-03-09", "00:00", False),   # yesterday is never due
    ("2025-03-09", "23:59", False),
    ("2025-03-11", "00:00", False),   # tomorrow
])
def test_reminder_is_due(date, time, expected):
    assert Reminder("msg", date, time).is_due(NOW) is expected


def test_reminder_due_one_minute_before_is_not_due():
    reminder = Reminder("msg", "2025-03-10", "14:30")
    assert reminder.is_due(datetime(2025, 3, 10, 14, 29)) is False
    assert reminder.is_due(datetime(2025, 3, 10, 14, 30)) is True


def test_reminder_defaults_to_wall_clock():
    now = datetime.now()
    yesterday = Reminder("msg", "1999-12-31", "00:00")
    assert yesterday.is_due() is False
    today_midnight = Reminder("msg", now.strftime("%Y-%m-%d"), "00:00")
    # Could only fail if the test straddles midnight
    assert today_midnight.is_due() is True
