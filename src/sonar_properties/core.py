"""Core generation entrypoints.

This module wires classification, the conflict gate, aggregation and the
properties writer into one synchronous run. It has no CLI dependencies so it
can be driven by other front ends.
"""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Sequence

from .aggregator import (
    build_project_data,
    compute_root_base_dir,
    compute_shared_files,
    write_modules,
)
from .discovery import load_project_records
from .models import AnalysisConfig, GenerationResult, ProjectData, ProjectRecord
from .summary import write_summary_report
from .validators import conflicts
from .validators.project_validity import classify
from .writer import PropertiesWriter

logger = logging.getLogger(__name__)

PROPERTIES_FILE_NAME = conflicts.SONAR_PROJECT_PROPERTIES


def build_properties(config: AnalysisConfig, projects: Sequence[ProjectData]) -> str:
    """Return the properties file contents for already classified projects."""
    writer = PropertiesWriter(config)
    root_dir = compute_root_base_dir(config, projects)

    writer.write_sonar_project_info(root_dir)
    write_modules(writer, projects)
    writer.write_shared_files(compute_shared_files(projects, root_dir))
    writer.write_global_settings(config.global_settings)

    return writer.flush()


def generate_properties_file(
    config: AnalysisConfig,
    records: Sequence[ProjectRecord] | None = None,
) -> GenerationResult:
    """Generate ``sonar-project.properties`` in the output directory.

    Params:
        config: global settings for this run
        records: project records to aggregate; when None they are loaded from
            the ProjectInfo.json files under ``config.output_dir``

    Returns: a GenerationResult; ``properties_file`` is None when generation
    was refused (conflicting files) or there was nothing to analyze.
    """
    if config is None:
        raise ValueError("config must not be None")
    if records is None:
        records = load_project_records(Path(config.output_dir))

    projects = build_project_data(records, classify(records))
    result = GenerationResult(projects=projects)

    result.report_file = write_summary_report(config, projects)

    check = conflicts.validate(config.working_directory, projects)
    if not check.ok:
        logger.error(
            "sonar-project.properties files are not understood by this generator. "
            "Remove those files from the following folders: %s",
            ", ".join(check.offending_dirs),
        )
        result.conflicting_dirs = check.offending_dirs
        return result

    if not result.valid_projects:
        logger.error(
            "No analysable projects were found. Analysis will not be performed. "
            "Check the build summary report for details."
        )
        return result

    contents = build_properties(config, projects)

    path = Path(config.output_dir) / PROPERTIES_FILE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8", newline="")
    logger.info("Generated analysis properties file: %s", path)

    result.properties_file = path
    return result
