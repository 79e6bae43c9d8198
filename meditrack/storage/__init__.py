"""
Storage layer for roster persistence.

This module contains both roster backends and the record codec they share.
"""
from meditrack.storage.base import Roster, RosterStore
from meditrack.storage.flat_file import FlatFileStore
from meditrack.storage.sqlite_store import Database, SQLiteStore

__all__ = [
    "Roster",
    "RosterStore",
    "FlatFileStore",
    "Database",
    "SQLiteStore",
]
