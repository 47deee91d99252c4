"""Turn classified records into per-module data ready for the writer."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping, Sequence

from .models import FILES_TO_ANALYZE, AnalysisConfig, ProjectData, ProjectRecord, ValidityStatus
from .parsers import file_list
from .writer import PropertiesWriter

logger = logging.getLogger(__name__)

ANALYZER_OUT_PATH_SETTING = re.compile(r"^sonar\.[A-Za-z]+\.analyzer\.projectOutPath$")
ROSLYN_REPORT_PATH_SETTING = re.compile(r"^sonar\.[A-Za-z]+\.roslyn\.reportFilePath$")


def is_under(path: str, directory: str) -> bool:
    """Return True if ``path`` is ``directory`` or lies beneath it."""
    path = os.path.normcase(os.path.abspath(path))
    directory = os.path.normcase(os.path.abspath(directory))
    try:
        return os.path.commonpath([path, directory]) == directory
    except ValueError:
        # different drives
        return False


def resolve_files(project_data: ProjectData) -> None:
    """Split the project's file list into module files and outside references."""
    base_dir = project_data.base_dir
    result = project_data.project.find_analysis_result(FILES_TO_ANALYZE)
    if base_dir is None or result is None:
        return

    for entry in file_list.parse(result.location):
        path = entry if os.path.isabs(entry) else os.path.join(base_dir, entry)
        if not os.path.isfile(path):
            logger.debug("File '%s' does not exist and will be skipped", path)
            continue
        if is_under(path, base_dir):
            project_data.module_files.append(path)
        else:
            project_data.referenced_files.append(path)


def collect_output_paths(project_data: ProjectData) -> None:
    for setting in project_data.project.analysis_settings:
        if not setting.value:
            continue
        if ANALYZER_OUT_PATH_SETTING.match(setting.id):
            project_data.analyzer_out_paths.append(setting.value)
        elif ROSLYN_REPORT_PATH_SETTING.match(setting.id):
            project_data.roslyn_report_paths.append(setting.value)


def build_project_data(
    records: Sequence[ProjectRecord], statuses: Mapping[ProjectRecord, ValidityStatus]
) -> list[ProjectData]:
    """Wrap every record with its status; resolve files for valid ones only.

    A valid record none of whose listed files exist is downgraded to
    NO_FILES_TO_ANALYZE.
    """
    projects: list[ProjectData] = []
    for record in records:
        project_data = ProjectData(project=record, status=statuses[record])
        if project_data.is_valid:
            resolve_files(project_data)
            collect_output_paths(project_data)
            if not project_data.module_files and not project_data.referenced_files:
                logger.debug(
                    "No listed file of project %s exists; it will not be analyzed",
                    record.full_path,
                )
                project_data.status = ValidityStatus.NO_FILES_TO_ANALYZE
        projects.append(project_data)
    return projects


def compute_root_base_dir(config: AnalysisConfig, projects: Iterable[ProjectData]) -> str:
    """Return the directory used as the root ``sonar.projectBaseDir``.

    An explicit setting wins; otherwise the deepest directory shared by all
    valid projects; otherwise the working directory.
    """
    if config.project_base_dir:
        return config.project_base_dir

    dirs = [p.base_dir for p in projects if p.is_valid and p.base_dir]
    if dirs:
        try:
            return os.path.commonpath(dirs)
        except ValueError:
            logger.debug("Projects do not share a common root; using the working directory")
    return config.working_directory


def compute_shared_files(projects: Sequence[ProjectData], root_dir: str) -> list[str]:
    """Return files referenced by projects but located under no valid project.

    Files outside ``root_dir`` cannot be indexed and are dropped with a warning.
    """
    project_dirs = [p.base_dir for p in projects if p.is_valid and p.base_dir]
    shared: list[str] = []
    dropped: set[str] = set()
    for project in projects:
        if not project.is_valid:
            continue
        for path in project.referenced_files:
            if path in shared or path in dropped or any(is_under(path, d) for d in project_dirs):
                continue
            if not is_under(path, root_dir):
                logger.warning(
                    "File '%s' is not located under the root directory '%s' and will not be analyzed.",
                    path,
                    root_dir,
                )
                dropped.add(path)
                continue
            shared.append(path)
    return shared


def write_modules(writer: PropertiesWriter, projects: Iterable[ProjectData]) -> list[str]:
    """Write one module per valid project, in order; return their GUIDs."""
    written: list[str] = []
    for project in projects:
        if not project.is_valid:
            continue
        writer.write_settings_for_project(project)
        written.append(project.guid)
    return written
