"""Shared fixtures: process locale isolation and compiled message catalogs."""

import locale
import struct
from pathlib import Path

import pytest

from diagtrans.i18n import Translator

LOCALE_ENV_VARS = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")

SWEDISH = {
    "Profile was read from {name}.": "Profilen lästes från {name}.",
    "Both IPv4 and IPv6 are disabled.": "Både IPv4 och IPv6 är avstängda.",
    "The parent zone is {pname}.": "Föräldrazonen är {pname}.",
}


def write_mo(path: Path, messages: dict[str, str]) -> Path:
    """Write a GNU .mo file (little endian, no hash table)."""
    messages = {"": "Content-Type: text/plain; charset=UTF-8\n", **messages}
    keys = sorted(messages)

    ids = b""
    strs = b""
    offsets = []
    for key in keys:
        msgid = key.encode("utf-8")
        msgstr = messages[key].encode("utf-8")
        offsets.append((len(ids), len(msgid), len(strs), len(msgstr)))
        ids += msgid + b"\0"
        strs += msgstr + b"\0"

    keystart = 7 * 4 + 16 * len(keys)
    valuestart = keystart + len(ids)
    koffsets: list[int] = []
    voffsets: list[int] = []
    for id_off, id_len, str_off, str_len in offsets:
        koffsets += [id_len, id_off + keystart]
        voffsets += [str_len, str_off + valuestart]

    header = struct.pack(
        "<Iiiiiii",
        0x950412DE,
        0,
        len(keys),
        7 * 4,
        7 * 4 + len(keys) * 8,
        0,
        0,
    )
    table = struct.pack(f"<{len(koffsets)}i", *koffsets) + struct.pack(
        f"<{len(voffsets)}i", *voffsets
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(header + table + ids + strs)
    return path


@pytest.fixture(autouse=True)
def _isolate_locale():
    """Reset the default translator and restore LC_MESSAGES around each test."""
    Translator.reset()
    saved = locale.setlocale(locale.LC_MESSAGES)
    yield
    locale.setlocale(locale.LC_MESSAGES, saved)
    Translator.reset()


@pytest.fixture
def c_environment(monkeypatch):
    """Environment with no locale variables, i.e. the "C" baseline."""
    for var in LOCALE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def swedish_locale_dir(tmp_path: Path, c_environment) -> Path:
    """Locale directory with a Swedish catalog for the diagtrans domain."""
    root = tmp_path / "locale"
    write_mo(root / "sv" / "LC_MESSAGES" / "diagtrans.mo", SWEDISH)
    return root
