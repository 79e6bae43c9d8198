"""
Roster store interface.

Both backends persist the whole roster at once:

    load_roster()        -> List[Patient]
    save_roster(roster)  -> bool

A load that cannot read its source starts empty; a save that fails is
reported through its return value and never touches the in-memory roster.
"""
from abc import ABC, abstractmethod
from typing import List

from meditrack.models.patient import Patient


# Type alias for the ordered patient collection
Roster = List[Patient]


class RosterStore(ABC):
    """Abstract whole-roster persistence backend."""

    #: Human-readable location of the store, used in log messages
    location: str

    @abstractmethod
    def load_roster(self) -> Roster:
        """
        Reconstruct the full roster from storage.

        Returns:
            Roster: Patients in storage order. Empty if nothing is stored or
                the store could not be read.
        """

    @abstractmethod
    def save_roster(self, roster: Roster) -> bool:
        """
        Replace everything in storage with the given roster.

        Args:
            roster: The complete in-memory roster.

        Returns:
            bool: True if saved, False if the write failed.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.location!r})"
