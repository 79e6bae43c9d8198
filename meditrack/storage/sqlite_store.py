"""
SQLite roster store.

Schema:
    patients(id, name, age, contact)
    health_records(id, patient_id, type, value1, value2, timestamp)
    medications(id, patient_id, name, dosage, schedule)
    reminders(id, patient_id, message, date, time)

Every child table references patients(id) with ON DELETE CASCADE, so
deleting a patient row clears everything recorded for it.
"""
import sqlite3
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from meditrack.core.exceptions import DatabaseConnectionError
from meditrack.models.health_record import HealthRecord
from meditrack.models.medication import Medication, Reminder
from meditrack.models.patient import Patient
from meditrack.storage.base import Roster, RosterStore
from meditrack.storage.codec import decode_record, encode_record, get_codec

logger = logging.getLogger(__name__)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS patients (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        age INTEGER,
        contact TEXT
    );

    CREATE TABLE IF NOT EXISTS health_records (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        patient_id INTEGER,
        type TEXT,
        value1 REAL,
        value2 REAL,
        timestamp INTEGER,
        FOREIGN KEY (patient_id) REFERENCES patients(id) ON DELETE CASCADE
    );

    CREATE TABLE IF NOT EXISTS medications (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        patient_id INTEGER,
        name TEXT,
        dosage TEXT,
        schedule TEXT,
        FOREIGN KEY (patient_id) REFERENCES patients(id) ON DELETE CASCADE
    );

    CREATE TABLE IF NOT EXISTS reminders (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        patient_id INTEGER,
        message TEXT,
        date TEXT,
        time TEXT,
        FOREIGN KEY (patient_id) REFERENCES patients(id) ON DELETE CASCADE
    );
"""


class Database:
    """
    SQLite connection manager.

    Features:
    - Schema created on first use
    - Foreign key constraints enabled on every connection (needed for cascades)
    - Busy timeout so a stray external reader does not fail a save immediately

    Usage:
        # Via the store factory (recommended):
        from meditrack.core.dependencies import get_store
        store = get_store()

        # Direct instantiation (for testing):
        db = Database(db_path="/tmp/test.db")
    """

    def __init__(self, db_path: str, busy_timeout: int = 5000):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file.
            busy_timeout: SQLite busy timeout in milliseconds.

        Raises:
            DatabaseConnectionError: If the database cannot be opened or initialized.
        """
        self.db_path = db_path
        self.busy_timeout = busy_timeout

        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error opening database {self.db_path}: {e}")
            raise DatabaseConnectionError(db_path=self.db_path) from e

    def _configure_connection(self, conn: sqlite3.Connection) -> None:
        conn.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout)}")
        conn.execute("PRAGMA foreign_keys = ON")

    def _init_db(self) -> None:
        """Initialize database schema if it doesn't exist."""
        conn = sqlite3.connect(self.db_path)
        try:
            self._configure_connection(conn)
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            conn.close()

        logger.info(
            f"Database initialized: {self.db_path} "
            f"(busy_timeout={self.busy_timeout}ms)"
        )

    def get_connection(self) -> sqlite3.Connection:
        """
        Get a new database connection.

        Returns:
            sqlite3.Connection: A connection with foreign keys enabled and busy
                timeout set. The caller closes it.
        """
        conn = sqlite3.connect(self.db_path)
        self._configure_connection(conn)
        return conn


class SQLiteStore(RosterStore):
    """
    Persists the roster to SQLite by whole-roster replace.

    A save deletes every patient (cascading to children) and reinserts the
    in-memory roster inside one transaction, so a failed save leaves the
    previous contents untouched.
    """

    def __init__(self, db: Database):
        """
        Initialize the store.

        Args:
            db: Database instance. Injected via core.dependencies.get_store().
        """
        self._db = db
        self.location = db.db_path

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    @staticmethod
    def _record_row(patient_id: int, record: HealthRecord) -> Tuple:
        encoded = encode_record(record)
        value1 = encoded.values[0]
        value2 = encoded.values[1] if len(encoded.values) > 1 else None
        return (patient_id, encoded.kind.value, value1, value2, encoded.timestamp)

    def save_roster(self, roster: Roster) -> bool:
        """
        Replace all stored patients with the given roster atomically.

        Returns:
            bool: True if committed, False if the transaction was rolled back.
        """
        try:
            conn = self._db.get_connection()
        except sqlite3.Error as e:
            logger.error(f"Could not connect to {self.location} for saving: {e}")
            return False

        cursor = conn.cursor()
        try:
            cursor.execute("BEGIN TRANSACTION")
            cursor.execute("DELETE FROM patients")

            for patient in roster:
                cursor.execute(
                    "INSERT INTO patients (name, age, contact) VALUES (?, ?, ?)",
                    (patient.name, patient.age, patient.contact)
                )
                patient_id = cursor.lastrowid

                cursor.executemany(
                    """
                    INSERT INTO health_records
                    (patient_id, type, value1, value2, timestamp)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [self._record_row(patient_id, record) for record in patient.records]
                )
                cursor.executemany(
                    "INSERT INTO medications (patient_id, name, dosage, schedule) VALUES (?, ?, ?, ?)",
                    [(patient_id, m.name, m.dosage, m.schedule) for m in patient.medications]
                )
                cursor.executemany(
                    "INSERT INTO reminders (patient_id, message, date, time) VALUES (?, ?, ?, ?)",
                    [(patient_id, r.message, r.date, r.time) for r in patient.reminders]
                )

            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(
                f"Error saving roster to {self.location}: {e}. Transaction rolled back."
            )
            return False
        finally:
            conn.close()

        logger.info(f"All data saved to database {self.location}", extra={"patients": len(roster)})
        return True

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def _load_records(self, cursor: sqlite3.Cursor, patient_id: int) -> List[HealthRecord]:
        cursor.execute(
            """
            SELECT type, value1, value2, timestamp FROM health_records
            WHERE patient_id = ?
            ORDER BY id ASC
            """,
            (patient_id,)
        )
        records = []
        for record_type, value1, value2, timestamp in cursor.fetchall():
            try:
                arity = len(get_codec(record_type).fields)
                records.append(decode_record(record_type, (value1, value2)[:arity], timestamp))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping unreadable health record for patient id {patient_id}: {e}")
        return records

    def _load_medications(self, cursor: sqlite3.Cursor, patient_id: int) -> List[Medication]:
        cursor.execute(
            "SELECT name, dosage, schedule FROM medications WHERE patient_id = ? ORDER BY id ASC",
            (patient_id,)
        )
        return [Medication(*(value or "" for value in row)) for row in cursor.fetchall()]

    def _load_reminders(self, cursor: sqlite3.Cursor, patient_id: int) -> List[Reminder]:
        cursor.execute(
            "SELECT message, date, time FROM reminders WHERE patient_id = ? ORDER BY id ASC",
            (patient_id,)
        )
        return [Reminder(*(value or "" for value in row)) for row in cursor.fetchall()]

    def load_roster(self) -> Roster:
        """
        Rebuild the roster from the database, in patient insertion order.

        Returns:
            Roster: The stored patients, or an empty list if the database
                could not be read.
        """
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = self._db.get_connection()
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, age, contact FROM patients ORDER BY id ASC")
            rows = cursor.fetchall()

            roster: Roster = []
            for row in rows:
                patient_id = row[0]
                try:
                    patient = Patient.from_row(row[1:])
                except (ValueError, TypeError) as e:
                    logger.warning(f"Skipping unreadable patient row id {patient_id}: {e}")
                    continue
                patient.records.extend(self._load_records(cursor, patient_id))
                patient.medications.extend(self._load_medications(cursor, patient_id))
                patient.reminders.extend(self._load_reminders(cursor, patient_id))
                roster.append(patient)
        except sqlite3.Error as e:
            logger.error(f"Error loading roster from {self.location}: {e}")
            return []
        finally:
            if conn is not None:
                conn.close()

        logger.info(f"Loaded {len(roster)} patient(s) from database {self.location}")
        return roster
