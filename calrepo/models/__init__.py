"""Pydantic models for calendar and event records."""

from calrepo.models.calendar import CalendarRecord, StorageMode
from calrepo.models.event import EventRecord

__all__ = [
    "CalendarRecord",
    "EventRecord",
    "StorageMode",
]
