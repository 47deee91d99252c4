"""Shared test fixtures for the properties generation test suite."""

import json
import uuid
from pathlib import Path

import pytest

from sonar_properties.models import (
    FILES_TO_ANALYZE,
    AnalysisConfig,
    AnalysisResult,
    ProjectRecord,
    ProjectType,
    Property,
)
from sonar_properties.writer.escaping import unescape


@pytest.fixture
def make_project(tmp_path):
    """Factory fixture that lays out a project directory and returns its record.

    Every name in ``files`` is created under the project directory and listed
    in the project's files-to-analyze list, followed by ``extra_files``.
    """
    def _make(
        dir_name: str,
        guid: str | None = None,
        *,
        name: str | None = None,
        project_type: ProjectType = ProjectType.PRODUCT,
        files=("File.cs",),
        extra_files=(),
        settings=(),
        language: str = "cs",
        encoding: str | None = "UTF-8",
        excluded: bool = False,
        with_file_list: bool = True,
    ) -> ProjectRecord:
        base = tmp_path / dir_name
        base.mkdir(parents=True, exist_ok=True)
        project_file = base / f"{dir_name}.csproj"
        project_file.write_text("", encoding="utf-8")

        listed = []
        for file_name in files:
            path = base / file_name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
            listed.append(str(path))
        listed.extend(str(p) for p in extra_files)

        results = ()
        if with_file_list:
            file_list = base / "FilesToAnalyze.txt"
            file_list.write_text("".join(f"{p}\n" for p in listed), encoding="utf-8")
            results = (AnalysisResult(id=FILES_TO_ANALYZE, location=str(file_list)),)

        return ProjectRecord(
            project_guid=guid or str(uuid.uuid4()),
            project_type=project_type,
            full_path=str(project_file),
            project_name=dir_name if name is None else name,
            project_language=language,
            encoding=encoding,
            analysis_results=results,
            analysis_settings=tuple(Property(id=k, value=v) for k, v in settings),
            is_excluded=excluded,
        )
    return _make


@pytest.fixture
def output_dir(tmp_path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def working_dir(tmp_path) -> Path:
    path = tmp_path / "cwd"
    path.mkdir()
    return path


@pytest.fixture
def config(output_dir, working_dir) -> AnalysisConfig:
    """A config with project identity set and no target version (legacy lists)."""
    return AnalysisConfig(
        output_dir=str(output_dir),
        project_key="my_project_key",
        project_name="my_project_name",
        project_version="1.0",
        working_directory=str(working_dir),
    )


@pytest.fixture
def write_project_info():
    """Factory fixture that stores a record as ProjectInfo.json under a directory."""
    def _write(directory: Path, record: ProjectRecord) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "ProjectInfo.json"
        path.write_text(json.dumps(record.to_dict()), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def read_properties():
    """Return a minimal properties reader: continuations joined, values unescaped."""
    def _read(text: str) -> dict[str, str]:
        logical: list[str] = []
        pending = ""
        for line in text.splitlines():
            stripped = line.lstrip() if pending else line
            trailing = len(stripped) - len(stripped.rstrip("\\"))
            if trailing % 2 == 1:
                pending += stripped[:-1]
                continue
            logical.append(pending + stripped)
            pending = ""
        if pending:
            logical.append(pending)

        props: dict[str, str] = {}
        for line in logical:
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            props[key] = unescape(value)
        return props
    return _read
