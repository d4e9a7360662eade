"""Find events across the repository by scanning indexed files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from calrepo.codec import read_document
from calrepo.constants import EVENTS_FIELD
from calrepo.storage.calendar_index import CalendarEntry, CalendarIndex


@dataclass(frozen=True)
class EventLocation:
    """An event together with the file and list position holding it."""

    event: dict
    file_path: Path
    calendar_id: str
    position: int


def read_events(path: Path) -> list:
    """Events list of a document, empty if it has none."""
    payload = read_document(path)
    if isinstance(payload, dict) and isinstance(payload.get(EVENTS_FIELD), list):
        return payload[EVENTS_FIELD]
    return []


def iter_entry_events(entry: CalendarEntry) -> Iterator[EventLocation]:
    """Every event of one calendar, in file order then list order."""
    for path in entry.event_files:
        for position, event in enumerate(read_events(path)):
            yield EventLocation(event, path, entry.calendar_id, position)


def iter_events(
    index: CalendarIndex, entries: Iterable[CalendarEntry] | None = None
) -> Iterator[EventLocation]:
    """Every event in the repository (or in ``entries``), lazily."""
    for entry in index.values() if entries is None else entries:
        yield from iter_entry_events(entry)


def locate_event(index: CalendarIndex, event_id: str) -> EventLocation | None:
    """Return the first event whose id matches, or None.

    Ids are unique repository-wide, so the first hit is the only one.
    """
    for location in iter_events(index):
        if isinstance(location.event, dict) and location.event.get("id") == event_id:
            return location
    return None
