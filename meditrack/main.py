"""
MediTrack - startup entry point.

Loads settings, configures logging, opens the configured roster store,
loads the roster and reports reminders that are due right now. The
interactive menu builds on the PatientService created here.

Failing to open the SQLite database ends the session; every other storage
problem is reported and the session starts with whatever could be loaded.
"""
import logging
import sys

from pydantic import ValidationError

from meditrack.core.config import get_settings
from meditrack.core.dependencies import get_patient_service, get_store
from meditrack.core.exceptions import DatabaseConnectionError
from meditrack.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """
    Start a MediTrack session.

    Returns:
        int: Process exit status (0 on success, 1 on a fatal startup error).
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.critical(f"Invalid configuration: {e}")
        return 1

    setup_logging(level=settings.meditrack_log_level, json_format=settings.use_json_logs)

    try:
        store = get_store()
    except DatabaseConnectionError as e:
        logger.critical(f"{e.detail}. Exiting.")
        return 1

    service = get_patient_service(store)
    roster = service.load()

    print("\nWelcome to MediTrack: Your health, Our priority")
    print(f"{len(roster)} patient(s) on record.")

    due = service.due_reminders()
    if not due:
        print("No reminders are currently due.")
    for patient, reminder in due:
        print(f"Reminder Due for {patient.name}: {reminder.summary()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
