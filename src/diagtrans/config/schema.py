"""
Pydantic models for diagtrans configuration.

Defines all configuration schemas using Pydantic v2 for validation,
defaults, and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "warn", "error"] = "warn"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}

    @field_validator("level", mode="before")
    @classmethod
    def _lower_level(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.lower()
            return "warn" if v == "warning" else v
        return v


class AppConfig(BaseModel):
    """Complete application configuration.

    This is the root of the configuration tree and the entry point for
    validation.
    """

    locale: str | None = Field(
        default=None,
        description="Locale to translate to. None = take it from the environment.",
    )
    domain: str = Field(default="diagtrans", description="gettext text domain")
    locale_dir: Path | None = Field(
        default=None,
        description="Directory with <lang>/LC_MESSAGES/<domain>.mo files",
    )
    catalogs: list[Path] = Field(
        default_factory=list,
        description="YAML module catalogs, merged in order (later files win)",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}

    @field_validator("locale")
    @classmethod
    def _non_empty_locale(cls, v: str | None) -> str | None:
        # An empty locale would mean "from the environment" to setlocale()
        if v is not None and not v.strip():
            return None
        return v
