"""Classify project records before aggregation.

Each record is checked against an ordered chain of predicates; the first
failing check decides its status. Duplicate identifiers are resolved after
the per-record pass and override whatever status the record had.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Callable, Sequence

from ..models import FILES_TO_ANALYZE, ProjectRecord, ValidityStatus
from ..parsers import file_list

logger = logging.getLogger(__name__)


def normalize_guid(text: str) -> str | None:
    """Return the canonical upper-case form of ``text`` or None if malformed."""
    try:
        value = uuid.UUID(text)
    except (ValueError, AttributeError, TypeError):
        return None
    if value.int == 0:
        return None
    return str(value).upper()


def _is_excluded(record: ProjectRecord) -> bool:
    return record.is_excluded


def _has_invalid_guid(record: ProjectRecord) -> bool:
    return normalize_guid(record.project_guid) is None


def _has_invalid_file_list(record: ProjectRecord) -> bool:
    if record.base_dir is None:
        return True
    result = record.find_analysis_result(FILES_TO_ANALYZE)
    return result is not None and not file_list.is_readable(result.location)


def _has_no_files(record: ProjectRecord) -> bool:
    result = record.find_analysis_result(FILES_TO_ANALYZE)
    return result is None or not file_list.parse(result.location)


CHECKS: tuple[tuple[Callable[[ProjectRecord], bool], ValidityStatus], ...] = (
    (_is_excluded, ValidityStatus.EXCLUDE_FLAG_SET),
    (_has_invalid_guid, ValidityStatus.INVALID_GUID),
    (_has_invalid_file_list, ValidityStatus.INVALID_FILE_LIST),
    (_has_no_files, ValidityStatus.NO_FILES_TO_ANALYZE),
)


def classify_record(record: ProjectRecord) -> ValidityStatus:
    for check, status in CHECKS:
        if check(record):
            return status
    return ValidityStatus.VALID


def classify(records: Sequence[ProjectRecord]) -> dict[ProjectRecord, ValidityStatus]:
    """Return the validity of every record, duplicates included."""
    statuses = {record: classify_record(record) for record in records}

    by_guid: dict[str, list[ProjectRecord]] = defaultdict(list)
    for record in records:
        key = normalize_guid(record.project_guid)
        if key is not None:
            by_guid[key].append(record)

    for guid, holders in by_guid.items():
        if len(holders) < 2:
            continue
        logger.warning(
            "Duplicate ProjectGuid: %s. The following projects will not be analyzed: %s",
            guid,
            ", ".join(r.full_path for r in holders),
        )
        for record in holders:
            statuses[record] = ValidityStatus.DUPLICATE_GUID

    for record, status in statuses.items():
        if status is not ValidityStatus.VALID:
            logger.debug("Project %s: %s", record.full_path, status.value)

    return statuses
