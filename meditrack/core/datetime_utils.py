"""
Datetime utilities for MediTrack.

Design Principles:
- Capture timestamps: timezone-aware UTC datetimes at whole-second precision
- Storage: Unix epoch seconds (integers) in both backends
- Display and reminder checks: local wall-clock time

Usage:
    from meditrack.core.datetime_utils import capture_now, to_epoch, from_epoch

    ts = capture_now()
    assert from_epoch(to_epoch(ts)) == ts
"""
from datetime import datetime, timezone
from typing import Optional


# =============================================================================
# CORE UTILITIES
# =============================================================================

def utc_now() -> datetime:
    """Get current datetime in UTC with timezone info."""
    return datetime.now(timezone.utc)


def capture_now() -> datetime:
    """
    Get the capture timestamp for a newly entered measurement.

    Truncated to whole seconds so it survives an epoch-seconds round trip unchanged.
    """
    return utc_now().replace(microsecond=0)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If datetime is naive (no timezone), assumes it's already UTC
    - If datetime has timezone, converts to UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# =============================================================================
# EPOCH CONVERSION
# =============================================================================

def to_epoch(dt: datetime) -> int:
    """Convert a datetime to integer Unix epoch seconds."""
    return int(to_utc(dt).timestamp())


def from_epoch(seconds: int) -> datetime:
    """Convert Unix epoch seconds to a UTC datetime."""
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc)


# =============================================================================
# LOCAL WALL-CLOCK FORMATTING
# =============================================================================

def format_local(dt: datetime) -> str:
    """Format a timestamp as local 'YYYY-MM-DD HH:MM' for display."""
    return to_utc(dt).astimezone().strftime("%Y-%m-%d %H:%M")


def local_now() -> datetime:
    """Get the current local wall-clock time (naive)."""
    return datetime.now()


def date_string(now: Optional[datetime] = None) -> str:
    """Zero-padded 'YYYY-MM-DD' for the given moment (defaults to local now)."""
    return (now or local_now()).strftime("%Y-%m-%d")


def clock_string(now: Optional[datetime] = None) -> str:
    """Zero-padded 24-hour 'HH:MM' for the given moment (defaults to local now)."""
    return (now or local_now()).strftime("%H:%M")
