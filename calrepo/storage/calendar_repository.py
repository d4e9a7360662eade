"""Calendar repository: calendar and event operations over the data tree."""

import logging
from dataclasses import dataclass
from pathlib import Path

from calrepo.config import RepositoryConfig
from calrepo.constants import CALENDAR_ID_FIELD, EVENTS_FIELD, TITLE_FIELD
from calrepo.exceptions import (
    CalendarNotFoundError,
    ConflictError,
    EventNotFoundError,
    InvalidArgumentError,
)
from calrepo.models.calendar import StorageMode
from calrepo.processing.ordering import sort_events
from calrepo.processing.patch import (
    check_calendar_patch,
    check_event_patch,
    merge_calendar_patch,
    merge_event_patch,
)
from calrepo.storage.calendar_index import CalendarEntry, CalendarIndex
from calrepo.storage.calendar_paths import CalendarPaths
from calrepo.storage.calendar_storage import CalendarStorage
from calrepo.storage.event_locator import (
    iter_events,
    locate_event,
    read_events,
)
from calrepo.storage.placement import resolve_placement
from calrepo.storage.scanner import scan_repository
from calrepo.utils import relative_path, utc_timestamp
from calrepo.validation.schema import SchemaValidator

logger = logging.getLogger(__name__)


@dataclass
class CalendarSummary:
    """One row of the calendar listing."""

    calendar_id: str
    title: str
    mode: StorageMode
    events: int
    path: str

    def to_dict(self) -> dict:
        return {
            "calendar_id": self.calendar_id,
            "title": self.title,
            "mode": self.mode.value,
            "events": self.events,
            "path": self.path,
        }


@dataclass
class EventWriteResult:
    """Outcome of writing an event."""

    event: dict
    path: Path
    moved_from: Path | None = None

    @property
    def moved(self) -> bool:
        return self.moved_from is not None


@dataclass
class SortedFile:
    """A document rewritten by the sort operation."""

    path: Path
    count: int


class CalendarRepository:
    """Calendar and event CRUD with move semantics.

    Every operation rebuilds the calendar index from disk; nothing is cached
    between calls, so external edits are always picked up.
    """

    def __init__(
        self,
        config: RepositoryConfig,
        storage: CalendarStorage | None = None,
        validator: SchemaValidator | None = None,
    ):
        """
        Initialize repository.

        Args:
            config: Repository configuration (root, data directory, filenames)
            storage: CalendarStorage instance (dependency injection)
            validator: SchemaValidator instance (dependency injection)
        """
        self.config = config
        self.storage = storage or CalendarStorage(config)
        self.validator = validator or SchemaValidator()

    @property
    def data_dir(self) -> Path:
        return self.config.data_dir

    def build_index(self) -> CalendarIndex:
        """Scan the data tree into a fresh index."""
        return scan_repository(self.data_dir, self.config.metadata_filename)

    def relative(self, path: Path) -> Path:
        """Path relative to the repository root, for messages and listings."""
        return relative_path(path, self.config.root)

    def _require_entry(
        self, index: CalendarIndex, calendar_id: str, need_metadata: bool = False
    ) -> CalendarEntry:
        entry = index.get(calendar_id)
        if entry is None or (need_metadata and not entry.has_metadata):
            raise CalendarNotFoundError(f"Calendar not found: {calendar_id}")
        return entry

    def _ensure_unique_event_id(self, index: CalendarIndex, event_id: str) -> None:
        found = locate_event(index, event_id)
        if found is not None:
            raise ConflictError(
                f"Duplicate event id: {event_id} in {self.relative(found.file_path)}"
            )

    # ─────────────────────────────────────────────────────────────────────
    # Calendars
    # ─────────────────────────────────────────────────────────────────────

    def list_calendars(self) -> list[CalendarSummary]:
        """Summaries of every indexed calendar, sorted by id."""
        index = self.build_index()
        rows = []
        for entry in index.values():
            meta = self.storage.read(entry.meta_path) if entry.meta_path else {}
            event_count = sum(len(read_events(p)) for p in entry.event_files)
            rows.append(
                CalendarSummary(
                    calendar_id=entry.calendar_id,
                    title=meta.get(TITLE_FIELD) or "",
                    mode=entry.mode,
                    events=event_count,
                    path=str(self.relative(entry.meta_path)) if entry.meta_path else "",
                )
            )
        return sorted(rows, key=lambda r: r.calendar_id)

    def get_calendar(self, calendar_id: str) -> dict:
        """Metadata record of a calendar as stored (flat records include events)."""
        entry = self._require_entry(self.build_index(), calendar_id, need_metadata=True)
        return self.storage.read(entry.meta_path)

    def create_calendar(
        self,
        calendar_id: str,
        payload: dict | None = None,
        mode: StorageMode | str = StorageMode.FLAT,
        subdir: str | None = None,
    ) -> Path:
        """
        Create a calendar as one flat document or a split directory.

        Args:
            calendar_id: New calendar id; overrides any id in ``payload``
            payload: Metadata fields (None values are dropped)
            mode: flat or split
            subdir: Optional directory under data/ to create it in

        Returns:
            Path to the metadata document
        """
        if not calendar_id:
            raise InvalidArgumentError("Missing calendar id")
        try:
            mode = StorageMode(mode)
        except ValueError:
            raise InvalidArgumentError("Invalid mode, use flat|split") from None

        index = self.build_index()
        if index.has(calendar_id):
            raise ConflictError(f"Calendar already exists: {calendar_id}")

        record = {k: v for k, v in (payload or {}).items() if v is not None}
        record[CALENDAR_ID_FIELD] = calendar_id

        if mode == StorageMode.FLAT:
            events = record.get(EVENTS_FIELD) or []
            if isinstance(events, list):
                self._check_initial_events(index, events)
                events = sort_events(events)
            record[EVENTS_FIELD] = events
        else:
            record.pop(EVENTS_FIELD, None)

        self.validator.ensure_valid("calendar", record, "Calendar")

        paths = CalendarPaths(
            self._base_dir(subdir),
            calendar_id,
            self.config.metadata_filename,
            self.config.extension,
        )
        destination = paths.destination(mode)
        if destination.exists():
            kind = "File" if mode == StorageMode.FLAT else "Directory"
            raise ConflictError(f"{kind} exists: {self.relative(destination)}")

        target = paths.metadata(mode)
        self.storage.write(target, record)
        logger.info(f"Created {mode.value} calendar '{calendar_id}' at {target}")
        return target

    def _base_dir(self, subdir: str | None) -> Path:
        if not subdir:
            return self.data_dir
        base = self.data_dir / subdir
        if self.data_dir.resolve() not in (base.resolve(), *base.resolve().parents):
            raise InvalidArgumentError(f"Directory must be inside data/: {subdir}")
        return base

    def _check_initial_events(self, index: CalendarIndex, events: list) -> None:
        """Events supplied with a new flat calendar must have fresh, distinct ids."""
        existing = {
            loc.event.get("id"): loc.file_path
            for loc in iter_events(index)
            if isinstance(loc.event, dict) and isinstance(loc.event.get("id"), str)
        }
        seen = set()
        for event in events:
            if not isinstance(event, dict) or not isinstance(event.get("id"), str):
                continue
            event_id = event["id"]
            if event_id in seen:
                raise ConflictError(f"Duplicate event id: {event_id} in payload")
            if event_id in existing:
                raise ConflictError(
                    f"Duplicate event id: {event_id} in {self.relative(existing[event_id])}"
                )
            seen.add(event_id)

    def update_calendar(self, calendar_id: str, patch: dict) -> Path:
        """Patch calendar metadata and rewrite only the metadata document."""
        check_calendar_patch(patch)

        index = self.build_index()
        entry = self._require_entry(index, calendar_id, need_metadata=True)

        current = self.storage.read(entry.meta_path)
        updated = merge_calendar_patch(current, patch)
        updated[CALENDAR_ID_FIELD] = calendar_id
        if entry.is_flat:
            updated[EVENTS_FIELD] = current.get(EVENTS_FIELD) or []
        else:
            updated.pop(EVENTS_FIELD, None)

        self.validator.ensure_valid("calendar", updated, "Calendar")

        self.storage.write(entry.meta_path, updated)
        logger.info(f"Updated calendar '{calendar_id}' in {entry.meta_path}")
        return entry.meta_path

    def delete_calendar(self, calendar_id: str, confirm: bool = False) -> Path:
        """Remove a calendar's file (flat) or whole directory (split). Irreversible."""
        if not confirm:
            raise InvalidArgumentError("Delete requires --yes")

        index = self.build_index()
        entry = self._require_entry(index, calendar_id, need_metadata=True)

        if entry.is_flat:
            self.storage.remove_file(entry.meta_path)
            return entry.meta_path

        directory = entry.meta_path.parent
        if directory.resolve() == self.data_dir.resolve():
            raise InvalidArgumentError(
                f"Refusing to delete the data directory for calendar '{calendar_id}'"
            )
        self.storage.remove_tree(directory)
        return directory

    # ─────────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────────

    def list_events(self, calendar_id: str | None = None) -> list[dict]:
        """Events of one calendar (or all), tagged with calendar_id and ordered."""
        index = self.build_index()
        if calendar_id:
            entries = [self._require_entry(index, calendar_id)]
        else:
            entries = None

        rows = [
            {**loc.event, CALENDAR_ID_FIELD: loc.calendar_id}
            for loc in iter_events(index, entries)
            if isinstance(loc.event, dict)
        ]
        return sort_events(rows)

    def create_event(
        self, calendar_id: str, event: dict, year: str | int | None = None
    ) -> EventWriteResult:
        """Append a new event to the file its date places it in."""
        if not calendar_id:
            raise InvalidArgumentError("Missing calendar id")
        if not isinstance(event, dict):
            raise InvalidArgumentError("Invalid event payload")
        if not event.get("id"):
            raise InvalidArgumentError("Event must include id")

        index = self.build_index()
        entry = self._require_entry(index, calendar_id)

        event = dict(event)
        event["updated_at"] = utc_timestamp()

        self._ensure_unique_event_id(index, event["id"])
        self.validator.ensure_valid("event", event, "Event")

        target = resolve_placement(
            entry, event, self.data_dir, year, self.config.extension
        )
        payload = self.storage.load_events_document(
            target, calendar_id, is_metadata=entry.is_flat
        )
        payload[EVENTS_FIELD].append(event)
        self.storage.write_sorted(target, payload)

        logger.info(f"Created event '{event['id']}' in {target}")
        return EventWriteResult(event=event, path=target)

    def update_event(
        self, event_id: str, patch: dict, year: str | int | None = None
    ) -> EventWriteResult:
        """Patch an event, moving it when its placement changes.

        A move writes the new target first, then removes the event from its old
        file, so an interruption leaves a duplicate rather than a lost event.
        """
        if not event_id:
            raise InvalidArgumentError("Missing event id")
        check_event_patch(patch)

        index = self.build_index()
        found = locate_event(index, event_id)
        if found is None:
            raise EventNotFoundError(f"Event not found: {event_id}")

        entry = self._require_entry(index, found.calendar_id)
        source_payload = self.storage.load_events_document(
            found.file_path, found.calendar_id, is_metadata=entry.is_flat
        )
        source_events = source_payload[EVENTS_FIELD]
        position = _find_position(source_events, event_id)
        if position is None:
            raise EventNotFoundError(
                f"Event not found in {self.relative(found.file_path)}"
            )

        updated = merge_event_patch(source_events[position], patch)
        updated["id"] = event_id
        updated["updated_at"] = utc_timestamp()

        self.validator.ensure_valid("event", updated, "Event")

        target = resolve_placement(
            entry, updated, self.data_dir, year, self.config.extension
        )

        if target.resolve() == found.file_path.resolve():
            source_events[position] = updated
            self.storage.write_sorted(found.file_path, source_payload)
            logger.info(f"Updated event '{event_id}' in {found.file_path}")
            return EventWriteResult(event=updated, path=found.file_path)

        target_payload = self.storage.load_events_document(
            target, found.calendar_id, is_metadata=entry.is_flat
        )
        target_payload[EVENTS_FIELD].append(updated)
        self.storage.write_sorted(target, target_payload)

        del source_events[position]
        self.storage.write_sorted(found.file_path, source_payload)

        logger.info(f"Moved event '{event_id}' from {found.file_path} to {target}")
        return EventWriteResult(event=updated, path=target, moved_from=found.file_path)

    def delete_event(self, event_id: str, confirm: bool = False) -> Path:
        """Remove an event from its owning file."""
        if not event_id:
            raise InvalidArgumentError("Missing event id")
        if not confirm:
            raise InvalidArgumentError("Delete requires --yes")

        index = self.build_index()
        found = locate_event(index, event_id)
        if found is None:
            raise EventNotFoundError(f"Event not found: {event_id}")

        payload = self.storage.read(found.file_path)
        payload[EVENTS_FIELD] = [
            e
            for e in payload.get(EVENTS_FIELD) or []
            if not (isinstance(e, dict) and e.get("id") == event_id)
        ]
        self.storage.write(found.file_path, payload)
        logger.info(f"Deleted event '{event_id}' from {found.file_path}")
        return found.file_path

    def sort_events(self, calendar_id: str | None = None) -> list[SortedFile]:
        """Re-apply event ordering to one calendar's files, or every file."""
        index = self.build_index()
        if calendar_id:
            entries = [self._require_entry(index, calendar_id)]
        else:
            entries = index.values()

        touched = []
        for entry in entries:
            for path in entry.event_files:
                payload = self.storage.read(path)
                if not isinstance(payload.get(EVENTS_FIELD), list):
                    continue
                count = self.storage.write_sorted(path, payload)
                touched.append(SortedFile(path=path, count=count))
        logger.info(f"Sorted {len(touched)} files")
        return touched


def _find_position(events: list, event_id: str) -> int | None:
    for position, event in enumerate(events):
        if isinstance(event, dict) and event.get("id") == event_id:
            return position
    return None
