"""
Dependency wiring for MediTrack.

Builds the configured roster store and the services on top of it, so the
entry point and the menu layer never instantiate backends directly.

Architecture Flow:
    Menu / entry point
         ↓
    PatientService (roster ownership, save/reload)
         ↓ injected
    RosterStore (FlatFileStore or SQLiteStore)
         ↓ configured from
    Settings

Testing:
    # Build stores against temp paths, or reset the cached store
    reset_store()
"""
import logging
from typing import Optional

from meditrack.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

_store_instance: Optional["RosterStore"] = None


def create_store(settings: Settings) -> "RosterStore":
    """
    Build the roster store selected by settings.

    Args:
        settings: Application settings.

    Returns:
        RosterStore: FlatFileStore for backend 'file', SQLiteStore for 'sqlite'.

    Raises:
        DatabaseConnectionError: If the SQLite database cannot be opened.
    """
    # Imported here to avoid circular imports between core and storage
    from meditrack.storage import Database, FlatFileStore, SQLiteStore

    if settings.meditrack_storage_backend == "file":
        logger.info(f"Using flat-file store: {settings.data_file_path}")
        return FlatFileStore(settings.data_file_path)

    logger.info(f"Using SQLite store: {settings.database_path}")
    db = Database(
        db_path=settings.database_path,
        busy_timeout=settings.meditrack_db_busy_timeout
    )
    return SQLiteStore(db)


def get_store() -> "RosterStore":
    """Get the roster store for the current settings (created once)."""
    global _store_instance

    if _store_instance is None:
        _store_instance = create_store(get_settings())

    return _store_instance


def reset_store() -> None:
    """Reset the cached store instance (for testing)."""
    global _store_instance
    _store_instance = None


def get_patient_service(store: Optional["RosterStore"] = None) -> "PatientService":
    """
    Create a PatientService over the given store (defaults to get_store()).
    """
    from meditrack.services.patient_service import PatientService

    return PatientService(store=store or get_store())
