"""Calendar index: calendar id to storage mode and constituent files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from calrepo.models.calendar import StorageMode


@dataclass
class CalendarEntry:
    """Where a calendar lives on disk.

    ``meta_path`` is None only for a split calendar whose data files exist but
    whose metadata document does not (yet). ``data_paths`` is kept sorted.
    """

    calendar_id: str
    mode: StorageMode
    meta_path: Path | None = None
    data_paths: list[Path] = field(default_factory=list)

    @property
    def is_flat(self) -> bool:
        return self.mode == StorageMode.FLAT

    @property
    def has_metadata(self) -> bool:
        return self.meta_path is not None

    @property
    def event_files(self) -> list[Path]:
        """Files whose events lists belong to this calendar, in read order."""
        if self.is_flat:
            return [self.meta_path] if self.meta_path else []
        return list(self.data_paths)


class CalendarIndex:
    """Read-only view over a single repository scan.

    Iteration order is by calendar id, so traversal is deterministic.
    """

    def __init__(self, entries: dict[str, CalendarEntry] | None = None):
        self._entries = dict(sorted((entries or {}).items()))

    def get(self, calendar_id: str) -> CalendarEntry | None:
        """Entry for ``calendar_id``, or None."""
        return self._entries.get(calendar_id)

    def has(self, calendar_id: str) -> bool:
        return calendar_id in self._entries

    def values(self) -> list[CalendarEntry]:
        return list(self._entries.values())

    def ids(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, calendar_id: object) -> bool:
        return calendar_id in self._entries

    def __iter__(self) -> Iterator[CalendarEntry]:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self._entries)
