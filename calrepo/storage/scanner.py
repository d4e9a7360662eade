"""Repository scanner: classify documents by shape and build the calendar index."""

import logging
from dataclasses import dataclass
from pathlib import Path

from calrepo.codec import read_document
from calrepo.constants import (
    CALENDAR_ID_FIELD,
    DOCUMENT_SUFFIXES,
    EVENTS_FIELD,
    METADATA_FILENAME,
    TITLE_FIELD,
)
from calrepo.exceptions import DocumentError
from calrepo.models.calendar import StorageMode
from calrepo.storage.calendar_index import CalendarEntry, CalendarIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitMeta:
    """Metadata document of a split calendar."""

    path: Path
    calendar_id: str


@dataclass(frozen=True)
class FlatCalendar:
    """Self-contained calendar: metadata plus events list."""

    path: Path
    calendar_id: str


@dataclass(frozen=True)
class EventData:
    """Events document belonging to a split calendar."""

    path: Path
    calendar_id: str


@dataclass(frozen=True)
class Unrecognized:
    """Anything else found under the data directory."""

    path: Path


# Type alias for all document classifications
Document = SplitMeta | FlatCalendar | EventData | Unrecognized


def _has_calendar_id(payload: object) -> bool:
    return isinstance(payload, dict) and isinstance(
        payload.get(CALENDAR_ID_FIELD), str
    )


def is_split_meta(
    payload: object, path: Path, metadata_filename: str = METADATA_FILENAME
) -> bool:
    """Metadata-shaped document under the reserved metadata filename."""
    return (
        path.name == metadata_filename
        and _has_calendar_id(payload)
        and isinstance(payload.get(TITLE_FIELD), str)
    )


def is_flat_calendar(
    payload: object, path: Path, metadata_filename: str = METADATA_FILENAME
) -> bool:
    """Metadata plus events list, under any non-reserved filename."""
    return (
        path.name != metadata_filename
        and _has_calendar_id(payload)
        and isinstance(payload.get(TITLE_FIELD), str)
        and isinstance(payload.get(EVENTS_FIELD), list)
    )


def is_split_event_data(
    payload: object, path: Path, metadata_filename: str = METADATA_FILENAME
) -> bool:
    """Events list with a calendar id and no title."""
    return (
        path.name != metadata_filename
        and _has_calendar_id(payload)
        and isinstance(payload.get(EVENTS_FIELD), list)
        and TITLE_FIELD not in payload
    )


def classify_document(
    payload: object, path: Path, metadata_filename: str = METADATA_FILENAME
) -> Document:
    """Decode a parsed document into exactly one classification.

    Candidates are tried in a fixed priority order and the first match wins.
    """
    if is_split_meta(payload, path, metadata_filename):
        return SplitMeta(path, payload[CALENDAR_ID_FIELD])
    if is_flat_calendar(payload, path, metadata_filename):
        return FlatCalendar(path, payload[CALENDAR_ID_FIELD])
    if is_split_event_data(payload, path, metadata_filename):
        return EventData(path, payload[CALENDAR_ID_FIELD])
    return Unrecognized(path)


def iter_document_paths(data_dir: Path) -> list[Path]:
    """Every YAML document under ``data_dir``, sorted by path string."""
    if not data_dir.is_dir():
        return []
    paths = [
        p
        for p in data_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in DOCUMENT_SUFFIXES
    ]
    return sorted(paths, key=str)


def _load_and_classify(path: Path, metadata_filename: str) -> Document:
    try:
        payload = read_document(path)
    except DocumentError as e:
        logger.warning(f"Skipping unreadable document: {e}")
        return Unrecognized(path)
    return classify_document(payload, path, metadata_filename)


def _merge(entries: dict[str, CalendarEntry], doc: Document) -> None:
    """Fold one classification into the entries being built."""
    match doc:
        case SplitMeta(path=path, calendar_id=cid):
            entry = entries.get(cid)
            if entry is None:
                entries[cid] = CalendarEntry(cid, StorageMode.SPLIT, meta_path=path)
            elif entry.is_flat:
                logger.warning(
                    f"Skipping {path}: calendar '{cid}' already stored flat in {entry.meta_path}"
                )
            elif entry.meta_path is not None:
                logger.warning(
                    f"Skipping {path}: calendar '{cid}' already has metadata {entry.meta_path}"
                )
            else:
                entry.meta_path = path

        case FlatCalendar(path=path, calendar_id=cid):
            entry = entries.get(cid)
            if entry is not None:
                existing = entry.meta_path or entry.data_paths[0]
                logger.warning(
                    f"Skipping {path}: calendar '{cid}' already defined by {existing}"
                )
            else:
                entries[cid] = CalendarEntry(
                    cid, StorageMode.FLAT, meta_path=path, data_paths=[path]
                )

        case EventData(path=path, calendar_id=cid):
            entry = entries.get(cid)
            if entry is None:
                entries[cid] = CalendarEntry(cid, StorageMode.SPLIT, data_paths=[path])
            elif entry.is_flat:
                logger.warning(
                    f"Skipping {path}: calendar '{cid}' is stored flat in {entry.meta_path}"
                )
            else:
                entry.data_paths.append(path)

        case Unrecognized(path=path):
            logger.debug(f"Ignoring unrecognized document {path}")


def scan_repository(
    data_dir: Path, metadata_filename: str = METADATA_FILENAME
) -> CalendarIndex:
    """Walk ``data_dir`` and build a fresh calendar index.

    The result depends only on what is on disk.
    """
    entries: dict[str, CalendarEntry] = {}
    for path in iter_document_paths(data_dir):
        _merge(entries, _load_and_classify(path, metadata_filename))

    for entry in entries.values():
        entry.data_paths.sort(key=str)

    logger.debug(f"Indexed {len(entries)} calendars under {data_dir}")
    return CalendarIndex(entries)
