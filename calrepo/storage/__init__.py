"""Storage layer: scanning, indexing, placement and calendar operations."""

from calrepo.storage.calendar_index import CalendarEntry, CalendarIndex
from calrepo.storage.calendar_repository import (
    CalendarRepository,
    CalendarSummary,
    EventWriteResult,
    SortedFile,
)
from calrepo.storage.calendar_storage import CalendarStorage
from calrepo.storage.event_locator import EventLocation, iter_events, locate_event
from calrepo.storage.placement import resolve_placement
from calrepo.storage.scanner import classify_document, scan_repository

__all__ = [
    "CalendarEntry",
    "CalendarIndex",
    "CalendarRepository",
    "CalendarStorage",
    "CalendarSummary",
    "EventLocation",
    "EventWriteResult",
    "SortedFile",
    "classify_document",
    "iter_events",
    "locate_event",
    "resolve_placement",
    "scan_repository",
]
