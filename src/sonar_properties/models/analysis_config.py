"""Global settings for one generation run."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from collections.abc import Iterable

from .project_record import Property


@dataclass(frozen=True)
class AnalysisConfig:
    """Immutable input to one properties-file generation."""

    output_dir: str
    project_key: str = ""
    project_name: str = ""
    project_version: str = ""
    target_version: str | None = None
    global_settings: tuple[Property, ...] = field(default_factory=tuple)
    working_directory: str = field(default_factory=os.getcwd)
    project_base_dir: str | None = None

    def __post_init__(self) -> None:
        if not self.output_dir:
            raise ValueError("output_dir must be provided")

    @property
    def sonar_dir(self) -> str:
        return os.path.join(self.output_dir, ".sonar")

    def with_settings(self, settings: Iterable[Property]) -> AnalysisConfig:
        """Return a copy with ``settings`` appended, later ids replacing earlier ones."""
        merged: dict[str, Property] = {p.id: p for p in self.global_settings}
        for prop in settings:
            merged[prop.id] = prop
        return replace(self, global_settings=tuple(merged.values()))
