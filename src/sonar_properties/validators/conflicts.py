"""Detect hand-written sonar-project.properties files that would clash with ours."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable

from ..models import ProjectData

SONAR_PROJECT_PROPERTIES = "sonar-project.properties"


@dataclass(frozen=True)
class ConflictCheck:
    """Result of a conflict scan; ``offending_dirs`` is empty when ok."""

    offending_dirs: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.offending_dirs


def has_sonar_project_properties(directory: str) -> bool:
    return (Path(directory) / SONAR_PROJECT_PROPERTIES).is_file()


def validate(invocation_dir: str, projects: Iterable[ProjectData]) -> ConflictCheck:
    """Check valid project directories and ``invocation_dir`` for a properties file.

    Every offending directory is reported, in first-seen order.
    """
    candidates: list[str] = []
    for project in projects:
        if project.is_valid and project.base_dir and project.base_dir not in candidates:
            candidates.append(project.base_dir)
    if invocation_dir not in candidates:
        candidates.append(invocation_dir)

    return ConflictCheck(offending_dirs=tuple(d for d in candidates if has_sonar_project_properties(d)))
