"""Aggregation-side view of a project record."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from .project_record import ProjectRecord, ProjectType


class ValidityStatus(str, enum.Enum):
    VALID = "Valid"
    EXCLUDE_FLAG_SET = "ExcludeFlagSet"
    INVALID_GUID = "InvalidGuid"
    DUPLICATE_GUID = "DuplicateGuid"
    NO_FILES_TO_ANALYZE = "NoFilesToAnalyze"
    INVALID_FILE_LIST = "InvalidFileList"


@dataclass(eq=False)
class ProjectData:
    """A record, its validity and the files resolved for it during one run."""

    project: ProjectRecord
    status: ValidityStatus = ValidityStatus.VALID
    module_files: list[str] = field(default_factory=list)
    referenced_files: list[str] = field(default_factory=list)
    analyzer_out_paths: list[str] = field(default_factory=list)
    roslyn_report_paths: list[str] = field(default_factory=list)

    @property
    def guid(self) -> str:
        """Canonical upper-case identifier used as module key prefix."""
        try:
            return str(uuid.UUID(self.project.project_guid)).upper()
        except (ValueError, AttributeError, TypeError):
            return (self.project.project_guid or "").upper()

    @property
    def is_valid(self) -> bool:
        return self.status is ValidityStatus.VALID

    @property
    def is_test(self) -> bool:
        return self.project.project_type is ProjectType.TEST

    @property
    def base_dir(self) -> str | None:
        return self.project.base_dir


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    projects: list[ProjectData] = field(default_factory=list)
    properties_file: Path | None = None
    report_file: Path | None = None
    conflicting_dirs: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.properties_file is not None

    @property
    def valid_projects(self) -> list[ProjectData]:
        return [p for p in self.projects if p.is_valid]
