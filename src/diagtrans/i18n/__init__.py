"""
Translation of engine log entries.

Public API:
    to_string(entry)      — Render "timestamp level message" for an entry.
    translate_tag(entry)  — Translated message only, or the entry's fallback text.
    set_locale(locale)    — Set the active locale (also sets LC_MESSAGES).
    get_locale()          — Get the active locale.

These work on the process default Translator. Use Translator.configure() to
give it a module registry, a text domain or an explicit locale.

Usage:
    from diagtrans.i18n import Translator, to_string

    Translator.configure("sv_SE.UTF-8", modules=registry)
    print(to_string(entry))
"""

from ..entries.model import LogEntryLike
from .catalog import (
    BASE_MODULE,
    CatalogFileError,
    CatalogRegistry,
    CatalogSource,
    ModuleRegistry,
    StaticCatalog,
    UnknownModuleError,
    load_catalog_file,
)
from .coordinator import FALLBACK_LOCALE, resolve_default_locale
from .translator import Translator

__all__ = [
    "to_string",
    "translate_tag",
    "set_locale",
    "get_locale",
    "Translator",
    "BASE_MODULE",
    "FALLBACK_LOCALE",
    "CatalogFileError",
    "CatalogRegistry",
    "CatalogSource",
    "ModuleRegistry",
    "StaticCatalog",
    "UnknownModuleError",
    "load_catalog_file",
    "resolve_default_locale",
]


def to_string(entry: LogEntryLike) -> str:
    """Render an entry with timestamp, level and translated message.

    Args:
        entry: Log entry to render.

    Returns:
        Display line, e.g. "   3.10 INFO      Profile was read from x.json."
    """
    return Translator.get().to_string(entry)


def translate_tag(entry: LogEntryLike) -> str:
    """Translate an entry's message without timestamp or level.

    Args:
        entry: Log entry to translate.

    Returns:
        Translated message, or entry.string when no template exists.
    """
    return Translator.get().translate_tag(entry)


def set_locale(locale: str) -> None:
    """Set the active locale.

    Not validated: a name the platform does not know is stored but leaves
    the process LC_MESSAGES unchanged.
    """
    Translator.get().set_locale(locale)


def get_locale() -> str:
    """Get the active locale name."""
    return Translator.get().get_locale()
