"""
Field validators shared by the entry schemas.
"""
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

FORBIDDEN_CHARACTERS = ("|", "\n", "\r")


def reject_delimiters(value: str) -> str:
    """Reject text that would corrupt a delimited roster file."""
    if any(char in value for char in FORBIDDEN_CHARACTERS):
        raise ValueError("must not contain '|' or line breaks")
    return value


def check_calendar_date(value: str) -> str:
    """Ensure a 'YYYY-MM-DD' string names a real calendar day."""
    datetime.strptime(value, "%Y-%m-%d")
    return value


# Free text that is safe to write into a delimited roster file
DelimitedText = Annotated[str, AfterValidator(reject_delimiters)]
