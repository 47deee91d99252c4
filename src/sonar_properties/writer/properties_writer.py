"""Accumulate the contents of a sonar-project.properties file.

The writer only builds text. Persisting the flushed buffer is the caller's
job. A writer is single use: once :meth:`PropertiesWriter.flush` has been
called every further write raises :class:`WriterStateError`.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Iterable

from ..models import AnalysisConfig, ProjectData, Property
from .escaping import LINE_END, encode_multi_value, escape

logger = logging.getLogger(__name__)

PROJECT_KEY = "sonar.projectKey"
PROJECT_NAME = "sonar.projectName"
PROJECT_VERSION = "sonar.projectVersion"
PROJECT_BASE_DIR = "sonar.projectBaseDir"
SOURCE_ENCODING = "sonar.sourceEncoding"
SOURCES = "sonar.sources"
TESTS = "sonar.tests"
WORKING_DIRECTORY = "sonar.working.directory"
MODULES = "sonar.modules"

DEFAULT_ENCODING = "utf-8"

_LANGUAGE_KEYS = {
    "cs": "cs",
    "c#": "cs",
    "csharp": "cs",
    "vbnet": "vbnet",
    "vb": "vbnet",
    "vb.net": "vbnet",
    "visualbasic": "vbnet",
}


class WriterStateError(RuntimeError):
    """Raised when a writer is used after it has been flushed."""


class WriterState(enum.Enum):
    OPEN = "open"
    FLUSHED = "flushed"


def language_key(language: str) -> str | None:
    """Map a project language to the property namespace of its analyzer."""
    return _LANGUAGE_KEYS.get((language or "").strip().lower())


class PropertiesWriter:
    def __init__(self, config: AnalysisConfig) -> None:
        if config is None:
            raise ValueError("config must not be None")
        self._config = config
        self._lines: list[str] = []
        self._projects: list[ProjectData] = []
        self._state = WriterState.OPEN

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def module_guids(self) -> list[str]:
        """Module key prefixes in write order."""
        return [p.guid for p in self._projects]

    def _ensure_open(self) -> None:
        if self._state is WriterState.FLUSHED:
            raise WriterStateError("The properties writer has already been flushed")

    def _append(self, line: str = "") -> None:
        self._lines.append(line)

    def _append_key_value(self, key: str, value: str, prefix: str | None = None) -> None:
        full_key = f"{prefix}.{key}" if prefix else key
        self._append(f"{full_key}={escape(value)}")

    def _append_multi_value(self, key: str, paths: Iterable[str], prefix: str | None = None) -> None:
        full_key = f"{prefix}.{key}" if prefix else key
        self._append(f"{full_key}=\\")
        self._append(encode_multi_value((escape(p) for p in paths), self._config.target_version))

    def module_working_directory(self, ordinal: int) -> str:
        return os.path.join(self._config.sonar_dir, f"mod{ordinal}")

    def write_settings_for_project(self, project_data: ProjectData) -> None:
        """Append the module block for one valid project."""
        if project_data is None:
            raise ValueError("project_data must not be None")
        self._ensure_open()

        project = project_data.project
        guid = project_data.guid

        self._append_key_value(PROJECT_KEY, f"{self._config.project_key}:{guid}", guid)
        self._append_key_value(PROJECT_NAME, project.project_name, guid)
        self._append_key_value(PROJECT_BASE_DIR, project_data.base_dir or "", guid)
        self._append_key_value(
            SOURCE_ENCODING, (project.encoding or DEFAULT_ENCODING).strip().lower(), guid
        )

        list_key = SOURCES
        if project_data.is_test:
            self._append_key_value(SOURCES, "", guid)
            list_key = TESTS
        if project_data.module_files:
            self._append_multi_value(list_key, project_data.module_files, guid)
            self._append()
        else:
            self._append_key_value(list_key, "", guid)

        self.write_analyzer_output_paths(project_data)
        self.write_roslyn_output_paths(project_data)

        self._append_key_value(
            WORKING_DIRECTORY, self.module_working_directory(len(self._projects)), guid
        )

        for setting in project.analysis_settings:
            self._append_key_value(setting.id, setting.value, guid)

        self._projects.append(project_data)

    def _write_language_paths(self, project_data: ProjectData, suffix: str, paths: list[str]) -> None:
        if not paths:
            return
        lang = language_key(project_data.project.project_language)
        if lang is None:
            logger.debug(
                "Skipping %s for project %s: unsupported language '%s'",
                suffix,
                project_data.project.full_path,
                project_data.project.project_language,
            )
            return
        self._append_multi_value(f"sonar.{lang}.{suffix}", paths, project_data.guid)

    def write_analyzer_output_paths(self, project_data: ProjectData) -> None:
        self._ensure_open()
        self._write_language_paths(
            project_data, "analyzer.projectOutPaths", project_data.analyzer_out_paths
        )

    def write_roslyn_output_paths(self, project_data: ProjectData) -> None:
        self._ensure_open()
        self._write_language_paths(
            project_data, "roslyn.reportFilePaths", project_data.roslyn_report_paths
        )

    def write_sonar_project_info(self, project_base_dir: str) -> None:
        """Append the root (solution-level) project settings."""
        self._ensure_open()
        self._append_key_value(PROJECT_KEY, self._config.project_key)
        if self._config.project_name:
            self._append_key_value(PROJECT_NAME, self._config.project_name)
        if self._config.project_version:
            self._append_key_value(PROJECT_VERSION, self._config.project_version)
        self._append_key_value(WORKING_DIRECTORY, self._config.sonar_dir)
        self._append()
        self._append_key_value(SOURCE_ENCODING, "UTF-8")
        self._append()
        self._append_key_value(PROJECT_BASE_DIR, project_base_dir)
        self._append()

    def write_shared_files(self, shared_files: Iterable[str]) -> None:
        """Append files referenced by projects but located outside all of them."""
        self._ensure_open()
        shared_files = list(shared_files)
        if shared_files:
            self._append_multi_value(SOURCES, shared_files)
        self._append()

    def write_global_settings(self, settings: Iterable[Property]) -> None:
        if settings is None:
            raise ValueError("settings must not be None")
        self._ensure_open()
        for setting in settings:
            self._append_key_value(setting.id, setting.value)

    def flush(self) -> str:
        """Close the writer and return the file contents."""
        self._ensure_open()
        self._state = WriterState.FLUSHED
        self._append(f"{MODULES}={','.join(self.module_guids)}")
        self._append()
        return "".join(line + LINE_END for line in self._lines)
