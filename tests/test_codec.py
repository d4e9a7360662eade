"""Tests for the YAML document codec."""

from calrepo.codec import parse, read_document, serialize, write_document


def test_parse_keeps_dates_as_strings():
    """Dates and datetimes are not converted to Python objects."""
    record = parse("date: 2025-03-01\nstart: 2025-03-01T10:00:00Z\n")
    assert record == {"date": "2025-03-01", "start": "2025-03-01T10:00:00Z"}


def test_serialize_writes_timestamps_unquoted():
    """ISO strings round-trip without quoting."""
    text = serialize({"start": "2025-03-01T10:00:00Z", "date": "2025-03-01"})
    assert "start: 2025-03-01T10:00:00Z" in text
    assert "date: 2025-03-01" in text


def test_serialize_preserves_key_order():
    """Keys are emitted in insertion order."""
    text = serialize({"title": "T", "calendar_id": "c", "events": []})
    assert text.index("title") < text.index("calendar_id") < text.index("events")


def test_serialize_is_round_trip_stable():
    """Parsing then serializing gives back the same text."""
    record = {
        "calendar_id": "conf-2025",
        "events": [
            {"id": "ev1", "start": "2025-03-01T10:00:00Z", "tags": ["talk", "keynote"]},
            {"id": "ev2", "all_day": True, "date": "2025-03-02", "title": "Ünïcode"},
        ],
    }
    text = serialize(record)
    assert parse(text) == record
    assert serialize(parse(text)) == text


def test_numeric_looking_strings_stay_strings():
    """Strings that look like numbers are quoted so they reload as strings."""
    record = {"id": "2025", "count": 3}
    assert parse(serialize(record)) == record


def test_write_document_is_atomic(tmp_path):
    """Writes replace the file and leave no temp files behind."""
    path = tmp_path / "nested" / "doc.yaml"
    write_document(path, {"a": 1})
    write_document(path, {"a": 2})

    assert read_document(path) == {"a": 2}
    assert [p.name for p in path.parent.iterdir()] == ["doc.yaml"]
