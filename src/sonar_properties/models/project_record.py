"""Per-project analysis record model."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Any

FILES_TO_ANALYZE = "FilesToAnalyze"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ProjectType(str, enum.Enum):
    PRODUCT = "Product"
    TEST = "Test"


@dataclass(frozen=True)
class Property:
    """A single ``id=value`` analysis setting."""

    id: str
    value: str

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Property id must be non-empty")

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "value": self.value}

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, Any] | Iterable[Any]) -> tuple[Property, ...]:
        """Build properties from a mapping or a list of ``{id, value}`` objects."""
        if isinstance(pairs, Mapping):
            return tuple(cls(id=str(k), value=_stringify(v)) for k, v in pairs.items())
        props: list[Property] = []
        for entry in pairs:
            if isinstance(entry, Property):
                props.append(entry)
            else:
                props.append(cls(id=str(entry.get("id", "")), value=_stringify(entry.get("value"))))
        return tuple(props)


@dataclass(frozen=True)
class AnalysisResult:
    """Output produced for a project during the build, e.g. a file list."""

    id: str
    location: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "location": self.location}


@dataclass(frozen=True, eq=False)
class ProjectRecord:
    """Metadata describing one compiled project.

    Records hash by identity: two records carrying the same GUID are still
    distinct entries when classified.
    """

    project_guid: str
    project_type: ProjectType
    full_path: str
    project_name: str = ""
    project_language: str = ""
    encoding: str | None = None
    analysis_results: tuple[AnalysisResult, ...] = ()
    analysis_settings: tuple[Property, ...] = ()
    is_excluded: bool = False

    @property
    def base_dir(self) -> str | None:
        """Return the directory holding the project file, if it can be computed."""
        if not self.full_path or not os.path.isabs(self.full_path):
            return None
        return os.path.dirname(self.full_path)

    def find_analysis_result(self, result_id: str) -> AnalysisResult | None:
        for result in self.analysis_results:
            if result.id == result_id:
                return result
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "projectGuid": self.project_guid,
            "projectName": self.project_name,
            "projectType": self.project_type.value,
            "fullPath": self.full_path,
            "projectLanguage": self.project_language,
            "encoding": self.encoding,
            "isExcluded": self.is_excluded,
            "analysisResults": [r.to_dict() for r in self.analysis_results],
            "analysisSettings": [s.to_dict() for s in self.analysis_settings],
        }
