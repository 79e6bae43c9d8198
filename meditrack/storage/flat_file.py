"""
Flat-file roster store.

File layout (newline-delimited text, ``|``-delimited sub-fields):

    <patient count>
    name|age|contact
    <record count>
    BP <systolic> <diastolic> <epoch>   |  Weight <kg> <epoch>  |  Sugar <mg/dL> <epoch>
    <medication count>
    name|dosage|schedule
    <reminder count>
    message|date|time
    ... (repeated per patient)

Free-text fields must not contain ``|`` or newlines. This is a format
constraint of the file, not something the store validates.
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from meditrack.core.exceptions import MalformedStorageError
from meditrack.models.health_record import HealthRecord
from meditrack.models.medication import Medication, Reminder
from meditrack.models.patient import Patient
from meditrack.storage.base import Roster, RosterStore
from meditrack.storage.codec import Number, decode_record, encode_record

logger = logging.getLogger(__name__)

DELIMITER = "|"
MAX_PATIENTS = 10000


# =============================================================================
# SERIALIZATION
# =============================================================================

def _format_value(value: Number) -> str:
    # repr() gives the shortest text that parses back to the same float
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


def serialize_roster(roster: Roster) -> str:
    """Render the whole roster in flat-file format."""
    lines: List[str] = [str(len(roster))]

    for patient in roster:
        lines.append(DELIMITER.join([patient.name, str(patient.age), patient.contact]))

        lines.append(str(len(patient.records)))
        for record in patient.records:
            encoded = encode_record(record)
            tokens = [encoded.kind.value]
            tokens.extend(_format_value(value) for value in encoded.values)
            tokens.append(str(encoded.timestamp))
            lines.append(" ".join(tokens))

        lines.append(str(len(patient.medications)))
        for medication in patient.medications:
            lines.append(DELIMITER.join([medication.name, medication.dosage, medication.schedule]))

        lines.append(str(len(patient.reminders)))
        for reminder in patient.reminders:
            lines.append(DELIMITER.join([reminder.message, reminder.date, reminder.time]))

    return "\n".join(lines) + "\n"


# =============================================================================
# PARSING
# =============================================================================

class RosterParser:
    """
    Line-oriented parser for the flat-file format.

    Patients are appended to ``patients`` only once fully parsed, so after a
    MalformedStorageError the list holds every patient read before the bad line.
    """

    def __init__(self, text: str):
        self._lines = text.split("\n")
        if self._lines and self._lines[-1] == "":
            self._lines.pop()
        self._position = 0
        self.patients: Roster = []

    def parse(self) -> Roster:
        """
        Parse the whole text.

        Raises:
            MalformedStorageError: On the first line that cannot be parsed.
        """
        patient_count = self._read_count("patient count", upper=MAX_PATIENTS)
        for _ in range(patient_count):
            self.patients.append(self._parse_patient())
        return self.patients

    def _next_line(self, what: str) -> str:
        if self._position >= len(self._lines):
            raise MalformedStorageError(
                f"Unexpected end of file while reading {what}",
                line_number=self._position + 1,
            )
        # Tolerate CRLF line endings
        line = self._lines[self._position].rstrip("\r")
        self._position += 1
        return line

    def _read_count(self, what: str, upper: Optional[int] = None) -> int:
        line = self._next_line(what)
        try:
            count = int(line.strip())
        except ValueError:
            raise MalformedStorageError(
                f"Could not read {what} from '{line}'", line_number=self._position
            ) from None

        if count < 0 or (upper is not None and count > upper):
            raise MalformedStorageError(
                f"Unreasonable {what} ({count})", line_number=self._position
            )
        return count

    def _split_fields(self, line: str, what: str) -> Tuple[str, str, str]:
        parts = line.split(DELIMITER, 2)
        if len(parts) < 3:
            raise MalformedStorageError(
                f"Error parsing {what}: expected two '{DELIMITER}' delimiters",
                line_number=self._position,
            )
        return parts[0], parts[1], parts[2]

    def _parse_patient(self) -> Patient:
        line = self._next_line("patient data")
        name, age_text, contact = self._split_fields(line, "patient data")
        try:
            age = int(age_text.strip())
        except ValueError:
            raise MalformedStorageError(
                f"Could not read patient age from '{age_text}'", line_number=self._position
            ) from None

        patient = Patient(name=name, age=age, contact=contact)

        for _ in range(self._read_count("record count")):
            patient.add_record(self._parse_record(self._next_line("health record")))

        for _ in range(self._read_count("medication count")):
            fields = self._split_fields(self._next_line("medication"), "medication")
            patient.add_medication(Medication(*fields))

        for _ in range(self._read_count("reminder count")):
            fields = self._split_fields(self._next_line("reminder"), "reminder")
            patient.add_reminder(Reminder(*fields))

        return patient

    def _parse_record(self, line: str) -> HealthRecord:
        tokens = line.split()
        if len(tokens) < 2:
            raise MalformedStorageError(
                f"Error parsing health record '{line}'", line_number=self._position
            )
        tag, values, timestamp = tokens[0], tokens[1:-1], tokens[-1]
        try:
            return decode_record(tag, values, timestamp)
        except ValueError as e:
            raise MalformedStorageError(
                f"Error parsing health record: {e}", line_number=self._position
            ) from None


# =============================================================================
# STORE
# =============================================================================

class FlatFileStore(RosterStore):
    """Persists the roster to a single delimited text file."""

    def __init__(self, path: str):
        """
        Initialize the store.

        Args:
            path: Roster file location. Sourced from Settings.data_file_path.
        """
        self.path = path
        self.location = path

    def load_roster(self) -> Roster:
        """
        Load the roster from the file.

        A missing or unreadable file starts an empty session. A malformed file
        is reported and yields the patients parsed before the bad line.
        """
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            logger.info(f"No previous data found at {self.path}. Starting a new session.")
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read roster file {self.path}: {e}")
            return []

        parser = RosterParser(text)
        try:
            parser.parse()
        except MalformedStorageError as e:
            logger.error(
                f"Error loading roster from {self.path}: {e.detail}. "
                f"Aborting load with {len(parser.patients)} patient(s) kept.",
                extra={"line_number": e.context.get("line_number"), "path": self.path},
            )
            return parser.patients

        logger.info(f"Loaded {len(parser.patients)} patient(s) from {self.path}")
        return parser.patients

    def save_roster(self, roster: Roster) -> bool:
        """
        Rewrite the whole file from the in-memory roster.

        Returns:
            bool: True on success, False if the file could not be written.
        """
        content = serialize_roster(roster)
        try:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Could not write roster file {self.path}: {e}")
            return False

        logger.info(f"Data saved successfully to {self.path}", extra={"patients": len(roster)})
        return True
