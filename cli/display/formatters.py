"""Pure formatting functions for display output."""


def format_when(event: dict) -> str:
    """Human-readable time span of an event.

    Args:
        event: Event record.

    Returns:
        ``date`` (plus ``end_date``) for all-day events, ``start`` (plus
        ``end``) otherwise, or "-" if neither is set.
    """
    if event.get("all_day"):
        start, end = event.get("date"), event.get("end_date")
    else:
        start, end = event.get("start"), event.get("end")
    if not start:
        return "-"
    if end:
        return f"{start} → {end}"
    return str(start)


def format_tags(tags: object) -> str:
    """Comma-joined tags, or "-" when there are none."""
    if not tags or not isinstance(tags, list):
        return "-"
    return ", ".join(str(t) for t in tags)
