"""Read the files-to-analyze list produced for a project."""

from __future__ import annotations

from pathlib import Path


def is_readable(path: str | Path) -> bool:
    """Return True if ``path`` is an existing file that decodes as a file list."""
    p = Path(path)
    if not p.is_file():
        return False
    try:
        parse(p)
    except (OSError, UnicodeDecodeError):
        return False
    return True


def parse(path: str | Path) -> list[str]:
    """Return the non-blank entries of a file list, in order.

    The list is one path per line; surrounding whitespace is ignored.
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    return [line.strip() for line in text.splitlines() if line.strip()]
