"""
Core module for application configuration, logging, and shared helpers.

This module provides:
- Settings: Application configuration via pydantic-settings
- Exceptions: Domain-specific exception classes
- Datetime utilities: epoch conversion and local wall-clock formatting
"""
from meditrack.core.config import Settings, get_settings

from meditrack.core.exceptions import (
    MediTrackError,
    PatientNotFoundError,
    InvalidRecordDataError,
    InvalidHeightError,
    NoWeightRecordError,
    StorageError,
    MalformedStorageError,
    DatabaseError,
    DatabaseConnectionError,
)

from meditrack.core.datetime_utils import (
    utc_now,
    capture_now,
    to_utc,
    to_epoch,
    from_epoch,
    format_local,
    date_string,
    clock_string,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Exceptions
    "MediTrackError",
    "PatientNotFoundError",
    "InvalidRecordDataError",
    "InvalidHeightError",
    "NoWeightRecordError",
    "StorageError",
    "MalformedStorageError",
    "DatabaseError",
    "DatabaseConnectionError",
    # Datetime utilities
    "utc_now",
    "capture_now",
    "to_utc",
    "to_epoch",
    "from_epoch",
    "format_local",
    "date_string",
    "clock_string",
]
