"""Locate and load the per-project records written during the build."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import ProjectRecord
from .parsers import project_info

logger = logging.getLogger(__name__)

PROJECT_INFO_FILE_NAME = "ProjectInfo.json"
EXCLUDES = {".sonar", ".git"}


def discover_project_info_files(root: Path) -> list[Path]:
    """Find ProjectInfo.json files recursively under root, in sorted order."""
    root = root.resolve()
    if not root.is_dir():
        return []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    found: list[Path] = []
    for path in root.rglob(PROJECT_INFO_FILE_NAME):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return sorted(found)


def load_project_records(root: Path) -> list[ProjectRecord]:
    """Parse every record under root; unreadable files are skipped with a warning."""
    records: list[ProjectRecord] = []
    for path in discover_project_info_files(root):
        try:
            records.append(project_info.parse(path))
        except project_info.ProjectInfoError as exc:
            logger.warning("Skipping project info file: %s", exc)
    logger.debug("Loaded %d project info file(s) from %s", len(records), root)
    return records
