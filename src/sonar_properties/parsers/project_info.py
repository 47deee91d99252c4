"""Parse ProjectInfo.json records emitted by the build integration."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

from ..models import AnalysisResult, ProjectRecord, ProjectType, Property

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "project-info.schema.json"


class ProjectInfoError(RuntimeError):
    """Raised when a project info file cannot be read or is invalid."""


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"{pointer or '<root>'}: {error.message}")
    return "; ".join(messages)


def from_dict(data: Any) -> ProjectRecord:
    """Validate ``data`` against the schema and build a ProjectRecord."""
    errors = sorted(_validator().iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ProjectInfoError(_format_errors(errors))

    try:
        return ProjectRecord(
            project_guid=data["projectGuid"],
            project_type=ProjectType(data["projectType"]),
            full_path=data["fullPath"],
            project_name=data.get("projectName", ""),
            project_language=data.get("projectLanguage", ""),
            encoding=data.get("encoding"),
            analysis_results=tuple(
                AnalysisResult(id=r["id"], location=r["location"])
                for r in data.get("analysisResults", [])
            ),
            analysis_settings=Property.from_pairs(data.get("analysisSettings", [])),
            is_excluded=data.get("isExcluded", False),
        )
    except ValueError as exc:
        raise ProjectInfoError(str(exc)) from exc


def parse(path: Path) -> ProjectRecord:
    """Return the ProjectRecord stored in ``path``."""
    try:
        content = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ProjectInfoError(f"Failed to read project info file {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ProjectInfoError(f"Invalid JSON in project info file {path}: {exc}") from exc

    try:
        return from_dict(data)
    except ProjectInfoError as exc:
        raise ProjectInfoError(f"Invalid project info file {path}: {exc}") from exc
