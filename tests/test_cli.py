"""Tests for the command-line interface."""

import json
import logging

import pytest
from typer.testing import CliRunner

from calrepo.codec import parse, read_document
from cli import console_level
from cli.parser import app


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the handlers installed by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path, monkeypatch):
    """Run the CLI against a repository rooted at tmp_path."""
    monkeypatch.delenv("CALREPO_OUTPUT_FORMAT", raising=False)
    monkeypatch.delenv("CALREPO_DEFAULT_MODE", raising=False)
    monkeypatch.delenv("CALREPO_DATA_DIR", raising=False)
    monkeypatch.delenv("CALREPO_METADATA_FILENAME", raising=False)
    (tmp_path / "data").mkdir()

    def _invoke(*args):
        return runner.invoke(app, ["--root", str(tmp_path), *args])

    return _invoke


def write_payload(path, record):
    path.write_text(json.dumps(record))
    return path


def test_no_args_shows_help(runner):
    result = runner.invoke(app, [])
    assert "calendar" in result.output


def test_calendar_create_flat(invoke, tmp_path):
    result = invoke(
        "calendar", "create", "--calendar", "team", "--title", "Team", "--tags", "work, daily"
    )

    assert result.exit_code == 0, result.output
    assert "Created calendar: data/team.yaml" in result.output
    record = read_document(tmp_path / "data" / "team.yaml")
    assert record["tags"] == ["work", "daily"]
    assert record["events"] == []


def test_calendar_create_split_from_file(invoke, tmp_path):
    payload = write_payload(tmp_path / "cal.json", {"title": "Conf", "locale": "en-GB"})

    result = invoke(
        "calendar", "create", "--calendar", "conf", "--mode", "split", "--file", str(payload)
    )

    assert result.exit_code == 0, result.output
    assert read_document(tmp_path / "data" / "conf" / "calendar.yaml") == {
        "title": "Conf",
        "locale": "en-GB",
        "calendar_id": "conf",
    }


def test_calendar_create_without_title_fails(invoke, tmp_path):
    result = invoke("calendar", "create", "--calendar", "team")

    assert result.exit_code == 1
    assert "schema validation failed" in result.output
    assert not (tmp_path / "data" / "team.yaml").exists()


def test_calendar_list_json(invoke):
    invoke("calendar", "create", "--calendar", "team", "--title", "Team")

    result = invoke("calendar", "list", "--format", "json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        {"calendar_id": "team", "title": "Team", "mode": "flat", "events": 0, "path": "data/team.yaml"}
    ]


def test_calendar_list_table(invoke):
    invoke("calendar", "create", "--calendar", "team", "--title", "Team")

    result = invoke("calendar", "list", "--format", "table")

    assert result.exit_code == 0, result.output
    assert "team" in result.output
    assert "flat" in result.output


def test_calendar_update(invoke, tmp_path):
    invoke("calendar", "create", "--calendar", "team", "--title", "Team")
    patch = write_payload(tmp_path / "patch.json", {"title": "Daily"})

    result = invoke("calendar", "update", "--calendar", "team", "--patch", str(patch))

    assert result.exit_code == 0, result.output
    assert read_document(tmp_path / "data" / "team.yaml")["title"] == "Daily"


def test_calendar_update_unknown(invoke, tmp_path):
    patch = write_payload(tmp_path / "patch.json", {"title": "Daily"})

    result = invoke("calendar", "update", "--calendar", "nope", "--patch", str(patch))

    assert result.exit_code == 1
    assert "Calendar not found: nope" in result.output


def test_calendar_delete_requires_yes(invoke, tmp_path):
    invoke("calendar", "create", "--calendar", "team", "--title", "Team")

    result = invoke("calendar", "delete", "--calendar", "team")
    assert result.exit_code == 1
    assert "Delete requires --yes" in result.output
    assert (tmp_path / "data" / "team.yaml").exists()

    result = invoke("calendar", "delete", "--calendar", "team", "--yes")
    assert result.exit_code == 0, result.output
    assert not (tmp_path / "data" / "team.yaml").exists()


def test_event_lifecycle(invoke, tmp_path):
    """Create, move, list and delete an event in a split calendar."""
    invoke("calendar", "create", "--calendar", "conf-2025", "--mode", "split", "--title", "Conf")
    event = write_payload(tmp_path / "event.json", {"id": "ev1", "start": "2025-03-01T10:00:00Z"})
    patch = tmp_path / "patch.yaml"
    patch.write_text("start: 2026-01-05T09:00:00Z\n")

    result = invoke("event", "create", "--calendar", "conf-2025", "--event", str(event))
    assert result.exit_code == 0, result.output
    assert "data/conf-2025/2025.yaml" in result.output

    result = invoke("event", "update", "--id", "ev1", "--patch", str(patch))
    assert result.exit_code == 0, result.output
    assert "moved to data/conf-2025/2026.yaml" in result.output

    result = invoke("event", "list", "--calendar", "conf-2025", "--format", "json")
    [row] = json.loads(result.stdout)
    assert row["id"] == "ev1"
    assert row["start"] == "2026-01-05T09:00:00Z"
    assert row["calendar_id"] == "conf-2025"

    result = invoke("event", "delete", "--id", "ev1", "--yes")
    assert result.exit_code == 0, result.output
    assert read_document(tmp_path / "data" / "conf-2025" / "2026.yaml")["events"] == []


def test_event_create_duplicate_id(invoke, tmp_path):
    invoke("calendar", "create", "--calendar", "team", "--title", "Team")
    event = write_payload(tmp_path / "event.json", {"id": "a", "start": "2024-05-01T09:00:00Z"})
    invoke("event", "create", "--calendar", "team", "--event", str(event))

    result = invoke("event", "create", "--calendar", "team", "--event", str(event))

    assert result.exit_code == 1
    assert "Duplicate event id: a in data/team.yaml" in result.output


def test_event_create_invalid_year(invoke, tmp_path):
    invoke("calendar", "create", "--calendar", "conf", "--mode", "split", "--title", "Conf")
    event = write_payload(tmp_path / "event.json", {"id": "a", "start": "2024-05-01T09:00:00Z"})

    result = invoke("event", "create", "--calendar", "conf", "--event", str(event), "--year", "24")

    assert result.exit_code == 1
    assert "Invalid year" in result.output


def test_event_sort(invoke, tmp_path):
    (tmp_path / "data" / "team.yaml").write_text(
        "calendar_id: team\n"
        "title: Team\n"
        "events:\n"
        "  - id: b\n"
        "    start: 2024-05-01T09:00:00Z\n"
        "  - id: a\n"
        "    start: 2024-05-01T09:00:00Z\n"
    )

    result = invoke("event", "sort")

    assert result.exit_code == 0, result.output
    assert parse(result.stdout) == {
        "sorted_files": 1,
        "files": [{"path": "data/team.yaml", "count": 2}],
    }
    events = read_document(tmp_path / "data" / "team.yaml")["events"]
    assert [e["id"] for e in events] == ["a", "b"]


def test_validate_passes(invoke):
    invoke("calendar", "create", "--calendar", "team", "--title", "Team")

    result = invoke("validate")

    assert result.exit_code == 0, result.output
    assert "Validation passed" in result.output


def test_validate_fails(invoke, tmp_path):
    (tmp_path / "data" / "team.yaml").write_text("calendar_id: other\ntitle: T\nevents: []\n")

    result = invoke("validate")

    assert result.exit_code == 1
    assert 'calendar_id must match filename "team"' in result.output


def test_log_file_written(invoke, tmp_path):
    invoke("--verbose", "calendar", "create", "--calendar", "team", "--title", "Team")
    assert "Created flat calendar 'team'" in (tmp_path / "logs" / "calrepo.log").read_text()


def test_console_level():
    assert console_level() == logging.WARNING
    assert console_level(verbose=True) == logging.INFO
    assert console_level(verbose=True, quiet=True) == logging.ERROR
