"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .models import GenerationResult, ProjectData, ValidityStatus


def aggregate(projects: Sequence[ProjectData]) -> dict[str, Any]:
    """Aggregate per-project classification into a JSON-serialisable report.

    Totals hold one counter per validity status (all statuses are present,
    zero when unused) plus the overall project count.
    """
    by_status = {status.value: 0 for status in ValidityStatus}
    entries: list[dict[str, Any]] = []
    for project in projects:
        by_status[project.status.value] += 1
        entries.append(
            {
                "guid": project.project.project_guid,
                "name": project.project.project_name,
                "path": project.project.full_path,
                "type": project.project.project_type.value,
                "status": project.status.value,
                "files": len(project.module_files),
            }
        )

    return {
        "projects": entries,
        "totals": {"projects": len(entries), **by_status},
    }


def result_report(result: GenerationResult) -> dict[str, Any]:
    """Report for a whole run, including where outputs were written."""
    report = aggregate(result.projects)
    report["succeeded"] = result.succeeded
    report["propertiesFile"] = str(result.properties_file) if result.properties_file else None
    report["summaryFile"] = str(result.report_file) if result.report_file else None
    report["conflictingDirectories"] = list(result.conflicting_dirs)
    return report
