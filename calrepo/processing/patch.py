"""Whitelisted patch-merge for calendar and event records."""

from calrepo.constants import CALENDAR_ID_FIELD, EVENT_ID_FIELD, EVENTS_FIELD
from calrepo.exceptions import ImmutableFieldError, InvalidArgumentError
from calrepo.models.calendar import CalendarRecord
from calrepo.models.event import EventRecord

CALENDAR_PATCH_FIELDS = frozenset(CalendarRecord.model_fields) - {
    CALENDAR_ID_FIELD,
    EVENTS_FIELD,
}
EVENT_PATCH_FIELDS = frozenset(EventRecord.model_fields) - {EVENT_ID_FIELD}


def _check(patch: object, identity_field: str, allowed: frozenset[str], kind: str) -> None:
    if not isinstance(patch, dict):
        raise InvalidArgumentError(f"Invalid {kind} patch payload")
    if identity_field in patch:
        raise ImmutableFieldError(f"Patch cannot change {identity_field}")

    unknown = sorted(str(k) for k in patch if k not in allowed)
    if unknown:
        raise InvalidArgumentError(
            f"Patch contains fields not allowed on a {kind}: {', '.join(unknown)}"
        )


def _apply(current: dict, patch: dict) -> dict:
    merged = dict(current)
    for key, value in patch.items():
        # null removes the field
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def check_calendar_patch(patch: object) -> None:
    """Reject non-mapping patches, ``calendar_id``, ``events`` and unknown fields."""
    _check(patch, CALENDAR_ID_FIELD, CALENDAR_PATCH_FIELDS, "calendar")


def check_event_patch(patch: object) -> None:
    """Reject non-mapping patches, ``id`` and unknown fields."""
    _check(patch, EVENT_ID_FIELD, EVENT_PATCH_FIELDS, "event")


def merge_calendar_patch(current: dict, patch: dict) -> dict:
    """Shallow-merge a patch onto calendar metadata.

    The events list is owned by the event operations and never patched here.
    """
    check_calendar_patch(patch)
    return _apply(current, patch)


def merge_event_patch(current: dict, patch: dict) -> dict:
    """Shallow-merge a patch onto an event."""
    check_event_patch(patch)
    return _apply(current, patch)
