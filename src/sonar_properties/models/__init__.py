"""Data models for properties-file generation."""

from __future__ import annotations

from .analysis_config import AnalysisConfig
from .project_data import GenerationResult, ProjectData, ValidityStatus
from .project_record import (
    FILES_TO_ANALYZE,
    AnalysisResult,
    ProjectRecord,
    ProjectType,
    Property,
)

__all__ = [
    "FILES_TO_ANALYZE",
    "AnalysisConfig",
    "AnalysisResult",
    "GenerationResult",
    "ProjectData",
    "ProjectRecord",
    "ProjectType",
    "Property",
    "ValidityStatus",
]
