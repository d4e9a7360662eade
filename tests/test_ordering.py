"""Tests for event ordering."""

from calrepo.processing.ordering import event_date_key, sort_events


def test_date_key_all_day_uses_date():
    """All-day events are keyed by date."""
    event = {"id": "a", "all_day": True, "date": "2025-01-02", "start": "2024-01-01T00:00:00Z"}
    assert event_date_key(event) == "2025-01-02"


def test_date_key_timed_uses_start():
    """Timed events are keyed by start."""
    event = {"id": "a", "date": "2020-01-01", "start": "2025-01-02T09:00:00Z"}
    assert event_date_key(event) == "2025-01-02T09:00:00Z"


def test_date_key_sentinels():
    """Missing temporal fields sort last."""
    assert event_date_key({"all_day": True}) == "9999-12-31"
    assert event_date_key({}) == "9999-12-31T23:59:59Z"


def test_sort_by_date_key():
    """Earlier date keys come first."""
    events = [
        {"id": "late", "start": "2025-05-01T09:00:00Z"},
        {"id": "early", "start": "2025-01-01T09:00:00Z"},
        {"id": "undated"},
    ]
    assert [e["id"] for e in sort_events(events)] == ["early", "late", "undated"]


def test_ties_broken_by_id():
    """Events sharing a start are ordered by id."""
    events = [
        {"id": "b", "start": "2024-05-01T09:00:00Z"},
        {"id": "a", "start": "2024-05-01T09:00:00Z"},
    ]
    assert [e["id"] for e in sort_events(events)] == ["a", "b"]


def test_sort_returns_new_list():
    """Input list is left untouched."""
    events = [{"id": "b"}, {"id": "a"}]
    result = sort_events(events)
    assert [e["id"] for e in events] == ["b", "a"]
    assert [e["id"] for e in result] == ["a", "b"]


def test_sort_tolerates_malformed_entries():
    """Non-mapping entries sink to the end instead of raising."""
    events = ["junk", {"id": "a", "start": "2025-01-01T00:00:00Z"}]
    assert sort_events(events)[0] == {"id": "a", "start": "2025-01-01T00:00:00Z"}


def test_only_true_flags_all_day():
    """A truthy non-boolean all_day flag is treated as timed."""
    event = {"id": "a", "all_day": "false", "date": "2020-01-01", "start": "2025-01-02T09:00:00Z"}
    assert event_date_key(event) == "2025-01-02T09:00:00Z"
