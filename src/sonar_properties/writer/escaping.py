"""Value escaping and multi-value encoding for Java-style properties files."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..parsers.version import supports_quoted_multi_values

logger = logging.getLogger(__name__)

LINE_END = "\r\n"
CONTINUATION = ",\\" + LINE_END

INVALID_PATHS_WARNING = (
    "The following paths contain invalid characters for this version of SonarQube "
    "and will be excluded from this analysis: %s"
)


def _utf16_units(code_point: int) -> tuple[int, ...]:
    if code_point <= 0xFFFF:
        return (code_point,)
    offset = code_point - 0x10000
    return (0xD800 + (offset >> 10), 0xDC00 + (offset & 0x3FF))


def escape(value: str) -> str:
    """Escape ``value`` so that a properties parser reads it back verbatim.

    Backslashes are doubled; printable ASCII is kept; every other character
    becomes ``\\uXXXX`` (upper-case hex, surrogate pairs above U+FFFF).
    """
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            out.extend(f"\\u{unit:04X}" for unit in _utf16_units(ord(ch)))
    return "".join(out)


def unescape(value: str) -> str:
    """Inverse of :func:`escape`; only used to check round trips."""
    out: list[str] = []
    units: list[int] = []
    i = 0

    def drain() -> None:
        if units:
            out.append(b"".join(u.to_bytes(2, "big") for u in units).decode("utf-16-be"))
            units.clear()

    while i < len(value):
        if value.startswith("\\u", i):
            units.append(int(value[i + 2 : i + 6], 16))
            i += 6
            continue
        drain()
        if value.startswith("\\\\", i):
            out.append("\\")
            i += 2
        else:
            out.append(value[i])
            i += 1
    drain()
    return "".join(out)


def _is_invalid_legacy_path(path: str) -> bool:
    return "," in path


def encode_multi_value(paths: Iterable[str], target_version: str | None) -> str:
    """Join ``paths`` into one logical multi-line property value.

    Servers from 6.5 accept quoted entries, so every path is quoted and
    embedded quotes are doubled. Older or unknown servers cannot parse quotes;
    paths containing a comma are dropped there and reported in one warning.
    """
    paths = list(paths)
    if supports_quoted_multi_values(target_version):
        return CONTINUATION.join('"' + p.replace('"', '""') + '"' for p in paths)

    invalid = [p for p in paths if _is_invalid_legacy_path(p)]
    if invalid:
        logger.warning(INVALID_PATHS_WARNING, ", ".join(invalid))
    return CONTINUATION.join(p for p in paths if not _is_invalid_legacy_path(p))
