"""Deterministic ordering of events within a document."""

from calrepo.constants import ALL_DAY_SENTINEL, TIMED_SENTINEL


def is_all_day(event: dict) -> bool:
    """True if the event is flagged all-day."""
    return event.get("all_day") is True


def event_date_key(event: dict) -> str:
    """Return the raw ISO string an event is ordered by.

    All-day events sort by ``date``, timed events by ``start``. Events missing
    that field sort last.
    """
    if is_all_day(event):
        return str(event.get("date") or ALL_DAY_SENTINEL)
    return str(event.get("start") or TIMED_SENTINEL)


def event_sort_key(event: dict) -> tuple[str, str]:
    """Date key first, then id as tie-break."""
    if not isinstance(event, dict):
        # Malformed entries sink to the end; validate reports them
        return TIMED_SENTINEL, ""
    return event_date_key(event), str(event.get("id") or "")


def sort_events(events: list[dict]) -> list[dict]:
    """Return a new, totally ordered list of events."""
    return sorted(events, key=event_sort_key)
