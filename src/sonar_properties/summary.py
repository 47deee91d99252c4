"""Human-readable summary of how each project was classified."""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Sequence

from .models import AnalysisConfig, ProjectData, ProjectType, ValidityStatus

logger = logging.getLogger(__name__)

REPORT_FILE_NAME = "ProjectInfo.log"

# (status, project type or None for any, title)
GROUPS: tuple[tuple[ValidityStatus, ProjectType | None, str], ...] = (
    (ValidityStatus.EXCLUDE_FLAG_SET, None, "Excluded projects"),
    (ValidityStatus.INVALID_GUID, None, "Projects with an invalid ProjectGuid"),
    (ValidityStatus.DUPLICATE_GUID, None, "Projects with a duplicate ProjectGuid"),
    (ValidityStatus.INVALID_FILE_LIST, None, "Projects with an unreadable file list"),
    (ValidityStatus.NO_FILES_TO_ANALYZE, None, "Projects with no files to analyze"),
    (ValidityStatus.VALID, ProjectType.PRODUCT, "Product projects"),
    (ValidityStatus.VALID, ProjectType.TEST, "Test projects"),
)


def _matches(project: ProjectData, status: ValidityStatus, project_type: ProjectType | None) -> bool:
    if project.status is not status:
        return False
    return project_type is None or project.project.project_type is project_type


def build_report(config: AnalysisConfig, projects: Sequence[ProjectData]) -> str:
    """Return the summary text, one line per project grouped by status."""
    lines = []
    lines.append("Project information summary")
    lines.append("")
    lines.append(f"Project key: {config.project_key}")
    lines.append(f"Project name: {config.project_name}")
    lines.append(f"Project version: {config.project_version}")
    lines.append(f"Total projects: {len(projects)}")

    for status, project_type, title in GROUPS:
        members = [p for p in projects if _matches(p, status, project_type)]
        lines.append("")
        lines.append(f"{title}: {len(members)}")
        if not members:
            lines.append("\tNone")
            continue
        for project in members:
            lines.append(f"\t{project.project.full_path}")

    return "\n".join(lines) + "\n"


def write_summary_report(config: AnalysisConfig, projects: Sequence[ProjectData]) -> Path:
    """Write the summary into the output directory and return its path."""
    if config is None:
        raise ValueError("config must not be None")
    if projects is None:
        raise ValueError("projects must not be None")

    path = Path(config.output_dir) / REPORT_FILE_NAME
    logger.info("Writing processing summary to %s", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_report(config, projects), encoding="utf-8")
    return path
