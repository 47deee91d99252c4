"""Target server version handling built atop packaging.version.

Only plain dotted numeric versions with at least two components are
recognised (e.g. "6.5", "7.9.1.12345"). Anything else is treated as unknown,
which selects the legacy multi-value encoding.
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

QUOTED_MULTI_VALUE_MIN_VERSION = Version("6.5")

_DOTTED_NUMERIC = re.compile(r"^\d+(\.\d+){1,3}$")


def parse_target_version(text: str | None) -> Version | None:
    if text is None:
        return None
    text = text.strip()
    if not _DOTTED_NUMERIC.fullmatch(text):
        return None
    try:
        return Version(text)
    except InvalidVersion:
        return None


def supports_quoted_multi_values(text: str | None) -> bool:
    """Return True when the target server understands quoted list values."""
    version = parse_target_version(text)
    return version is not None and version >= QUOTED_MULTI_VALUE_MIN_VERSION
