"""Calendar storage for file management."""

import logging
import shutil
from pathlib import Path

from calrepo.codec import read_document, write_document
from calrepo.config import RepositoryConfig
from calrepo.constants import CALENDAR_ID_FIELD, EVENTS_FIELD, TITLE_FIELD
from calrepo.exceptions import ConflictError, DocumentError
from calrepo.processing.ordering import sort_events

logger = logging.getLogger(__name__)


class CalendarStorage:
    """File management for calendar documents.

    Every write is a full-file overwrite.
    """

    def __init__(self, config: RepositoryConfig | None = None):
        """Initialize storage with config."""
        self.config = config or RepositoryConfig()

    def read(self, path: Path) -> dict:
        """Read a document that must be a mapping."""
        payload = read_document(path)
        if not isinstance(payload, dict):
            raise DocumentError(f"{path} is not a mapping")
        return payload

    def write(self, path: Path, payload: dict) -> None:
        """Overwrite a document."""
        write_document(path, payload)

    def load_events_document(
        self, path: Path, calendar_id: str, is_metadata: bool = False
    ) -> dict:
        """Read an events document, or start an empty one if absent.

        An existing document must belong to ``calendar_id``. Unless it is a flat
        calendar document (``is_metadata``) it must not carry metadata.
        """
        if path.exists():
            payload = self.read(path)
            owner = payload.get(CALENDAR_ID_FIELD)
            if owner != calendar_id:
                raise ConflictError(
                    f"{path} belongs to calendar '{owner}', not '{calendar_id}'"
                )
            if not is_metadata and TITLE_FIELD in payload:
                raise ConflictError(f"{path} holds calendar metadata, not events")
        else:
            payload = {CALENDAR_ID_FIELD: calendar_id, EVENTS_FIELD: []}
        if not isinstance(payload.get(EVENTS_FIELD), list):
            payload[EVENTS_FIELD] = []
        return payload

    def write_sorted(self, path: Path, payload: dict) -> int:
        """Sort the payload's events and write it. Returns the event count."""
        payload[EVENTS_FIELD] = sort_events(payload.get(EVENTS_FIELD) or [])
        self.write(path, payload)
        return len(payload[EVENTS_FIELD])

    def remove_file(self, path: Path) -> None:
        """Delete a single document."""
        path.unlink()
        logger.info(f"Removed {path}")

    def remove_tree(self, directory: Path) -> None:
        """Delete a calendar directory and all contents."""
        shutil.rmtree(directory)
        logger.info(f"Removed directory {directory}")
