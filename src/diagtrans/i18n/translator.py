"""
Translator — renders log entries in the active locale.

Resolution chain for one entry:
    catalog[module][tag] → gettext translation for the locale → {name} expansion
    no template          → entry.string (untranslated fallback)

Constructing a Translator, changing its locale and translating all update the
process-wide message locale. Only one Translator should be active per process:
a second instance changing the locale also changes what the first one
produces. Translator.get() hands out a process default instance.
"""

import threading
from pathlib import Path

import structlog

from ..entries.model import LogEntryLike
from .catalog import BASE_MODULE, Catalog, CatalogRegistry, ModuleRegistry
from .coordinator import (
    apply_message_locale,
    forced_locale_environment,
    resolve_default_locale,
)
from .interpolate import expand, lookup_message

logger = structlog.get_logger()

DEFAULT_DOMAIN = "diagtrans"
DEFAULT_LOCALE_DIR = Path(__file__).resolve().parent.parent / "locale"


class Translator:
    """Translates log entries through the merged module catalog.

    Usage:
        translator = Translator(locale="sv_SE.UTF-8", modules=registry)
        print(translator.to_string(entry))
    """

    _instance: "Translator | None" = None
    _lock = threading.Lock()

    def __init__(
        self,
        locale: str | None = None,
        modules: ModuleRegistry | None = None,
        *,
        base_module: str | None = BASE_MODULE,
        domain: str = DEFAULT_DOMAIN,
        locale_dir: Path | None = None,
    ) -> None:
        """Create a translator and apply its locale to the process.

        Args:
            locale: Locale name (e.g. "sv_SE.UTF-8"). Resolved from the
                environment if None.
            modules: Registry of evaluation modules. Only SYSTEM messages are
                known without one.
            base_module: Module requested before the registry's own list.
            domain: gettext text domain.
            locale_dir: Directory holding ``<lang>/LC_MESSAGES/<domain>.mo``.
        """
        self._catalog = CatalogRegistry(modules, base_module=base_module)
        self.domain = domain
        self.locale_dir = Path(locale_dir) if locale_dir else DEFAULT_LOCALE_DIR
        self._locale = ""
        self.locale = locale if locale is not None else resolve_default_locale()
        logger.debug("translator.init", locale=self._locale, domain=domain)

    @classmethod
    def get(cls) -> "Translator":
        """Get or create the process default translator."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def configure(cls, locale: str | None = None, **kwargs) -> "Translator":
        """Replace the process default translator.

        Takes the same arguments as the constructor.
        """
        with cls._lock:
            cls._instance = cls(locale, **kwargs)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the process default translator (for testing)."""
        with cls._lock:
            cls._instance = None

    # ── Locale ──────────────────────────────────────────────────────────

    @property
    def locale(self) -> str:
        """Current locale name."""
        return self._locale

    @locale.setter
    def locale(self, value: str) -> None:
        # Not validated; an unknown name leaves LC_MESSAGES untouched
        self._locale = value
        apply_message_locale(value)

    def get_locale(self) -> str:
        return self.locale

    def set_locale(self, value: str) -> None:
        self.locale = value

    # ── Catalog ─────────────────────────────────────────────────────────

    @property
    def data(self) -> Catalog:
        """Merged catalog, built on first access."""
        return self._catalog.load()

    # ── Rendering ───────────────────────────────────────────────────────

    def to_string(self, entry: LogEntryLike) -> str:
        """Render an entry as ``timestamp level message``.

        Example:
            "   3.10 INFO      Both IPv4 and IPv6 are disabled."
        """
        return f"{entry.timestamp:7.2f} {entry.level:<9} {self.translate_tag(entry)}"

    def translate_tag(self, entry: LogEntryLike) -> str:
        """Translate the entry's tag and expand its arguments.

        Returns:
            The translated message, or entry.string if the module/tag pair
            has no template.
        """
        template = self._catalog.lookup(entry.module, entry.tag)
        if not template:
            return entry.string

        args = getattr(entry, "printable_args", entry.args)
        with forced_locale_environment(self._locale):
            message = lookup_message(template, self.domain, self.locale_dir)
        return expand(message, args)

    def __repr__(self) -> str:
        return f"Translator(locale={self._locale!r}, domain={self.domain!r})"
