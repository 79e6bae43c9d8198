"""
Shared exception classes for MediTrack.

This module provides the domain exception hierarchy. Every error carries a
human-readable detail message plus keyword context, so the menu layer can
echo it back to the user and the logs can record it in structured form.

Usage:
    from meditrack.core.exceptions import PatientNotFoundError

    raise PatientNotFoundError(position=3)
"""
from typing import Any, Dict, Optional


# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================

class MediTrackError(Exception):
    """
    Base exception for all MediTrack domain errors.

    All custom exceptions should inherit from this class.
    """

    detail: str = "An unexpected error occurred"

    def __init__(self, detail: Optional[str] = None, **kwargs: Any):
        """
        Initialize the exception.

        Args:
            detail: Human-readable error message. Uses class default if not provided.
            **kwargs: Additional context describing the failure.
        """
        self.detail = detail or self.__class__.detail
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        result: Dict[str, Any] = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


# =============================================================================
# PATIENT / INPUT EXCEPTIONS
# =============================================================================

class PatientNotFoundError(MediTrackError):
    """Raised when a 1-based roster position does not address a patient."""

    detail = "Patient not found"

    def __init__(self, position: Optional[int] = None, **kwargs: Any):
        detail = f"No patient at position {position}" if position is not None else self.detail
        super().__init__(detail=detail, position=position, **kwargs)


class InvalidRecordDataError(MediTrackError):
    """Raised when entered data fails validation."""

    detail = "Invalid record data"


class InvalidHeightError(InvalidRecordDataError):
    """Raised when a BMI computation is declined because the height is not positive."""

    detail = "Invalid height. Cannot calculate BMI."

    def __init__(self, height: Optional[float] = None, **kwargs: Any):
        super().__init__(height=height, **kwargs)


class NoWeightRecordError(MediTrackError):
    """Raised when a patient has no weight record to compute BMI from."""

    detail = "BMI cannot be calculated. No weight records found."

    def __init__(self, patient_name: Optional[str] = None, **kwargs: Any):
        super().__init__(patient_name=patient_name, **kwargs)


# =============================================================================
# STORAGE EXCEPTIONS
# =============================================================================

class StorageError(MediTrackError):
    """Raised when the roster store cannot be read or written."""

    detail = "Storage operation failed"


class MalformedStorageError(StorageError):
    """Raised when stored roster data cannot be parsed."""

    detail = "Stored data is malformed"

    def __init__(self, detail: Optional[str] = None, line_number: Optional[int] = None, **kwargs: Any):
        if detail and line_number is not None:
            detail = f"{detail} (line {line_number})"
        super().__init__(detail=detail, line_number=line_number, **kwargs)


class DatabaseError(StorageError):
    """Raised when a database operation fails."""

    detail = "Database operation failed"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        detail = f"Database error during {operation}" if operation else self.detail
        super().__init__(detail=detail, operation=operation, **kwargs)


class DatabaseConnectionError(DatabaseError):
    """Raised when the database cannot be opened or initialized."""

    def __init__(self, db_path: Optional[str] = None, **kwargs: Any):
        super().__init__(operation="connect", db_path=db_path, **kwargs)
        if db_path:
            self.detail = f"Failed to open database '{db_path}'"
            self.args = (self.detail,)
