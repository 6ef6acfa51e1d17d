"""
Template interpolation.

Templates are gettext msgids with ``{name}`` placeholders. The msgid is first
translated through the text domain for the ambient locale, then every
placeholder is replaced by the printable form of the matching argument.
"""

import gettext
import re
from collections.abc import Mapping
from pathlib import Path

# Only bare {name} tokens are placeholders; any other brace is literal text
_PLACEHOLDER = re.compile(r"\{([A-Za-z_]\w*)\}")


def expand(template: str, args: Mapping[str, object]) -> str:
    """Substitute ``{name}`` placeholders with str() of the matching argument.

    A placeholder without a matching argument stays as literal ``{name}``.
    Braces that do not form a placeholder are kept as they are.

    Example:
        >>> expand("Profile was read from {name}.", {"name": "/etc/profile.json"})
        'Profile was read from /etc/profile.json.'
    """

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        return str(args[name]) if name in args else match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def lookup_message(msgid: str, domain: str, locale_dir: Path) -> str:
    """Translate msgid through the gettext catalog of the ambient locale.

    The language is taken from the environment at call time. Without a
    compiled catalog for it, msgid is returned unchanged.
    """
    translation = gettext.translation(domain, localedir=str(locale_dir), fallback=True)
    return translation.gettext(msgid)
