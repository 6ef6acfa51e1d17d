"""
Log entries as produced by the evaluation engine.
"""

from .model import LEVELS, LogEntry, LogEntryLike
from .reader import EntryFormatError, parse_entries, read_entries

__all__ = [
    "LEVELS",
    "LogEntry",
    "LogEntryLike",
    "EntryFormatError",
    "parse_entries",
    "read_entries",
]
