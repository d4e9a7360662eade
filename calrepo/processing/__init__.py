"""Processing layer for event records."""

from calrepo.processing.ordering import event_date_key, event_sort_key, sort_events
from calrepo.processing.patch import (
    check_calendar_patch,
    check_event_patch,
    merge_calendar_patch,
    merge_event_patch,
)

__all__ = [
    "event_date_key",
    "event_sort_key",
    "sort_events",
    "check_calendar_patch",
    "check_event_patch",
    "merge_calendar_patch",
    "merge_event_patch",
]
