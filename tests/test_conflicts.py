"""Tests for validators/conflicts.py."""

import os

from sonar_properties.models import ProjectData, ValidityStatus
from sonar_properties.validators.conflicts import SONAR_PROJECT_PROPERTIES, validate


def _drop_properties_file(directory):
    with open(os.path.join(directory, SONAR_PROJECT_PROPERTIES), "w", encoding="utf-8") as fh:
        fh.write("sonar.projectKey=manual\n")


def _dir(record):
    return os.path.dirname(record.full_path)


class TestValidate:
    def test_no_conflicts(self, make_project, working_dir):
        projects = [ProjectData(make_project("a")), ProjectData(make_project("b"))]

        check = validate(str(working_dir), projects)

        assert check.ok
        assert check.offending_dirs == ()

    def test_every_offending_directory_reported(self, make_project, working_dir):
        a = make_project("a")
        b = make_project("b")
        c = make_project("c")
        _drop_properties_file(_dir(a))
        _drop_properties_file(_dir(c))
        _drop_properties_file(str(working_dir))

        check = validate(str(working_dir), [ProjectData(a), ProjectData(b), ProjectData(c)])

        assert not check.ok
        assert check.offending_dirs == (_dir(a), _dir(c), str(working_dir))

    def test_invalid_projects_ignored(self, make_project, working_dir):
        invalid = make_project("invalid")
        _drop_properties_file(_dir(invalid))

        check = validate(
            str(working_dir), [ProjectData(invalid, status=ValidityStatus.INVALID_GUID)]
        )

        assert check.ok

    def test_invocation_dir_alone(self, working_dir):
        _drop_properties_file(str(working_dir))

        check = validate(str(working_dir), [])

        assert check.offending_dirs == (str(working_dir),)

    def test_shared_directory_reported_once(self, make_project):
        a = make_project("a")
        _drop_properties_file(_dir(a))

        check = validate(_dir(a), [ProjectData(a), ProjectData(a)])

        assert check.offending_dirs == (_dir(a),)

    def test_directory_named_like_sentinel_is_not_a_conflict(self, make_project, working_dir):
        os.mkdir(os.path.join(str(working_dir), SONAR_PROJECT_PROPERTIES))
        assert validate(str(working_dir), [ProjectData(make_project("a"))]).ok
