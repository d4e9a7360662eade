"""Shared constants for the calendar repository."""

# Reserved filename of a split calendar's metadata document
METADATA_FILENAME = "calendar.yaml"

# Repository-level documents that are never calendars
RESERVED_FILENAMES = ("calendar.yaml", "calendar.yml", "taxonomy.yaml")

DOCUMENT_SUFFIXES = (".yaml", ".yml")

# Date keys used when an event has no temporal field
ALL_DAY_SENTINEL = "9999-12-31"
TIMED_SENTINEL = "9999-12-31T23:59:59Z"

CALENDAR_ID_FIELD = "calendar_id"
EVENT_ID_FIELD = "id"
EVENTS_FIELD = "events"
TITLE_FIELD = "title"
