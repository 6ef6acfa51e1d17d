"""
Log entry model.

An entry is one diagnostic record produced by the evaluation engine. The
translator only relies on the LogEntryLike protocol, so entries coming from
the engine can be rendered directly; LogEntry is the concrete model used
when entries are read from files.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel, Field, field_validator

# Engine severities, lowest to highest
LEVELS: dict[str, int] = {
    "DEBUG3": -2,
    "DEBUG2": -1,
    "DEBUG": 0,
    "INFO": 1,
    "NOTICE": 2,
    "WARNING": 3,
    "ERROR": 4,
    "CRITICAL": 5,
}


class LogEntryLike(Protocol):
    """What the translator reads from an entry."""

    timestamp: float
    level: str
    module: str
    tag: str
    args: Mapping[str, Any]

    @property
    def string(self) -> str:
        ...


def _printable(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return value


class LogEntry(BaseModel):
    """One diagnostic record.

    Attributes:
        timestamp: Seconds since the start of the run.
        level: Severity name (see LEVELS).
        module: Producing module, uppercased (e.g. "SYSTEM", "BASIC").
        tag: Symbolic message identifier within the module.
        args: Named arguments for the message template.
    """

    timestamp: float = 0.0
    level: str = "DEBUG"
    module: str = "SYSTEM"
    tag: str
    args: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown level '{v}'. Valid: {', '.join(LEVELS)}")
        return level

    @property
    def numeric_level(self) -> int:
        return LEVELS[self.level]

    @property
    def printable_args(self) -> dict[str, Any]:
        """Arguments with list values joined by ", "."""
        return {key: _printable(value) for key, value in self.args.items()}

    @property
    def string(self) -> str:
        """Untranslated rendering, used when no template exists.

        Format: ``MODULE:TAG name1=value1; name2=value2`` with names sorted.
        """
        printable = self.printable_args
        argstr = "; ".join(f"{key}={printable[key]}" for key in sorted(printable))
        return f"{self.module}:{self.tag} {argstr}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LogEntry":
        """Build an entry from a plain JSON/YAML record.

        Raises:
            ValidationError: If a field is missing, unknown or invalid.
        """
        return cls.model_validate(dict(data))

    def __str__(self) -> str:
        return self.string
