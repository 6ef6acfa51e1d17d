"""
Locale coordination — process-wide message locale.

Message lookup through gettext is keyed by the ambient locale of the process
(LC_MESSAGES and the LANGUAGE/LC_ALL/LC_MESSAGES/LANG environment variables),
not by an argument. These helpers are the only place that touches that
global state, and they do it under one process-wide lock.
"""

import locale
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

logger = structlog.get_logger()

# msgid and msgstr differ between "C" and en_US.UTF-8, so "C" is never used as is
BASELINE_LOCALE = "C"
FALLBACK_LOCALE = "en_US.UTF-8"

_lock = threading.RLock()


def apply_message_locale(value: str) -> str | None:
    """Set the process-wide LC_MESSAGES.

    A locale name the platform does not know is ignored, as the C library
    does: the process setting stays unchanged and no error is raised.

    Args:
        value: Locale name, or "" to take it from the environment.

    Returns:
        The locale name now in effect, or None if the platform rejected value.
    """
    with _lock:
        try:
            return locale.setlocale(locale.LC_MESSAGES, value)
        except locale.Error:
            logger.debug("locale.rejected", locale=value)
            return None


def current_message_locale() -> str:
    """Query LC_MESSAGES without changing it."""
    with _lock:
        return locale.setlocale(locale.LC_MESSAGES)


def resolve_default_locale() -> str:
    """Resolve the locale to use when none was given.

    Side effect: LC_MESSAGES is set from the environment.

    Returns:
        The environment's message locale, or FALLBACK_LOCALE when that is
        the unlocalized "C" baseline.
    """
    with _lock:
        resolved = apply_message_locale("")
        if resolved is None:
            resolved = current_message_locale()

    if resolved == BASELINE_LOCALE:
        resolved = FALLBACK_LOCALE

    logger.debug("locale.resolved", locale=resolved)
    return resolved


@contextmanager
def forced_locale_environment(value: str) -> Iterator[None]:
    """Force LC_ALL to value for the duration of the block.

    Some platforms resolve the catalog language once and then stick to it
    unless the environment says otherwise at lookup time.
    """
    with _lock:
        previous = os.environ.get("LC_ALL")
        os.environ["LC_ALL"] = value
        try:
            yield
        finally:
            if previous is None:
                os.environ.pop("LC_ALL", None)
            else:
                os.environ["LC_ALL"] = previous
