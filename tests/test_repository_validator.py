"""Tests for whole-repository validation."""

import pytest

from calrepo.validation.repository_validator import RepositoryValidator


@pytest.fixture
def validate(config, data_dir):
    """Run the repository validator and return its problems."""

    def _validate():
        return RepositoryValidator(config).validate().problems

    return _validate


@pytest.fixture
def valid_tree(write_doc):
    write_doc(
        "team-standup.yaml",
        {
            "calendar_id": "team-standup",
            "title": "Team Standup",
            "events": [{"id": "a", "start": "2024-05-01T09:00:00Z"}],
        },
    )
    write_doc("conf-2025/calendar.yaml", {"calendar_id": "conf-2025", "title": "Conf"})
    write_doc(
        "conf-2025/2025.yaml",
        {"calendar_id": "conf-2025", "events": [{"id": "ev1", "start": "2025-03-01T10:00:00Z"}]},
    )
    write_doc("taxonomy.yaml", {"tags": ["work"]})


def test_valid_repository(valid_tree, validate):
    assert validate() == []


def test_empty_repository(validate):
    assert validate() == ["No calendars found under data/."]


def test_repository_built_by_operations_is_valid(repository, validate):
    repository.create_calendar("conf", {"title": "Conf"}, mode="split")
    repository.create_calendar("team", {"title": "Team"})
    repository.create_event("conf", {"id": "e1", "start": "2025-03-01T10:00:00Z"})
    repository.create_event("team", {"id": "e2", "all_day": True, "date": "2025-03-02"})
    repository.update_event("e1", {"start": "2026-01-01T10:00:00Z"})

    assert validate() == []


def test_duplicate_event_id_across_calendars(valid_tree, write_doc, validate):
    write_doc(
        "conf-2025/2026.yaml",
        {"calendar_id": "conf-2025", "events": [{"id": "a", "start": "2026-03-01T10:00:00Z"}]},
    )

    [problem] = validate()
    assert problem.startswith('Duplicate event id "a" found in')
    assert "data/conf-2025/2026.yaml" in problem
    assert "data/team-standup.yaml" in problem


def test_split_metadata_with_events(valid_tree, write_doc, validate):
    write_doc(
        "conf-2025/calendar.yaml",
        {"calendar_id": "conf-2025", "title": "Conf", "events": []},
    )
    assert validate() == [
        "data/conf-2025/calendar.yaml must not include events in split mode."
    ]


def test_split_directory_name_mismatch(write_doc, validate):
    write_doc("conf/calendar.yaml", {"calendar_id": "conf-2025", "title": "Conf"})
    assert validate() == [
        'data/conf/calendar.yaml calendar_id must match directory name "conf".'
    ]


def test_flat_filename_mismatch(write_doc, validate):
    write_doc("team.yaml", {"calendar_id": "standup", "title": "T", "events": []})
    assert validate() == ['data/team.yaml calendar_id must match filename "team".']


def test_flat_without_events(write_doc, validate):
    write_doc("team.yaml", {"calendar_id": "team", "title": "T"})
    assert validate() == ["data/team.yaml must include events array in flat mode."]


def test_malformed_split_data_file(valid_tree, write_doc, validate):
    write_doc("conf-2025/2026.yaml", {"events": []})
    assert validate() == [
        "data/conf-2025/2026.yaml must be an object with calendar_id and events array."
    ]


def test_split_data_file_wrong_calendar(valid_tree, write_doc, validate):
    write_doc("conf-2025/2026.yaml", {"calendar_id": "other", "events": []})
    assert validate() == [
        "data/conf-2025/2026.yaml calendar_id does not match data/conf-2025/calendar.yaml."
    ]


def test_invalid_event_reported(valid_tree, write_doc, validate):
    write_doc(
        "conf-2025/2026.yaml",
        {"calendar_id": "conf-2025", "events": [{"id": "bad", "all_day": True}]},
    )
    [problem] = validate()
    assert problem.startswith("data/conf-2025/2026.yaml has invalid event:")


def test_schema_failure_reported(write_doc, validate):
    write_doc("team.yaml", {"calendar_id": "team", "events": []})
    [problem] = validate()
    assert problem.startswith("data/team.yaml failed schema validation:")
    assert "title" in problem


def test_duplicate_calendar_id(write_doc, validate):
    write_doc("a/team.yaml", {"calendar_id": "team", "title": "A", "events": []})
    write_doc("b/team.yaml", {"calendar_id": "team", "title": "B", "events": []})
    [problem] = validate()
    assert problem.startswith('Duplicate calendar_id "team" found in data/b/team.yaml')


def test_reports_every_problem(write_doc, validate):
    write_doc("one.yaml", {"calendar_id": "one", "title": "T"})
    write_doc("two.yaml", {"calendar_id": "two", "title": "T"})
    assert len(validate()) == 2


def test_non_ascii_year_file_is_a_flat_candidate(write_doc, validate):
    """Only ASCII four-digit names are treated as year partitions."""
    write_doc("２０２５.yaml", {"calendar_id": "x", "events": []})
    [problem] = validate()
    assert "failed schema validation" in problem
