"""Resolve which file an event belongs in."""

import re
from pathlib import Path

from calrepo.exceptions import InvalidPlacementError
from calrepo.processing.ordering import is_all_day
from calrepo.storage.calendar_index import CalendarEntry

_YEAR = re.compile(r"[0-9]{4}")


def placement_year(event: dict, year_override: str | int | None = None) -> str:
    """Year partition for an event.

    Priority: explicit override, then ``date`` for all-day events, then
    ``start``. Never depends on where the event currently lives.
    """
    if year_override is not None and str(year_override) != "":
        year = str(year_override)
    else:
        source = event.get("date") if is_all_day(event) else event.get("start")
        if not source or len(str(source)) < 4:
            raise InvalidPlacementError(
                "Cannot infer split target year. Provide --year or valid event date/start."
            )
        year = str(source)[:4]

    if not _YEAR.fullmatch(year):
        raise InvalidPlacementError(f"Invalid year for split calendar target file: {year}")
    return year


def split_directory(entry: CalendarEntry, data_dir: Path) -> Path:
    """Directory holding a split calendar's documents."""
    if entry.meta_path is not None:
        return entry.meta_path.parent
    if entry.data_paths:
        return entry.data_paths[0].parent
    return data_dir / entry.calendar_id


def resolve_placement(
    entry: CalendarEntry,
    event: dict,
    data_dir: Path,
    year_override: str | int | None = None,
    extension: str = "yaml",
) -> Path:
    """Target file for ``event`` in ``entry``'s calendar.

    Flat calendars always use their single document; the override is ignored.
    Split calendars use ``<calendar-dir>/<year>.<ext>``.
    """
    if entry.is_flat:
        return entry.meta_path
    year = placement_year(event, year_override)
    return split_directory(entry, data_dir) / f"{year}.{extension}"
