"""Whole-repository validation that reports every problem at once."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from calrepo.codec import read_document
from calrepo.config import RepositoryConfig
from calrepo.constants import (
    CALENDAR_ID_FIELD,
    DOCUMENT_SUFFIXES,
    EVENTS_FIELD,
    RESERVED_FILENAMES,
)
from calrepo.exceptions import DocumentError, FieldError
from calrepo.utils import relative_path
from calrepo.validation.schema import SchemaValidator

logger = logging.getLogger(__name__)

_YEAR_FILE = re.compile(r"[0-9]{4}\.ya?ml")


@dataclass
class ValidationReport:
    """Problems found in a repository; empty means valid."""

    problems: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems

    def add(self, message: str) -> None:
        logger.debug(message)
        self.problems.append(message)


def _is_document(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in DOCUMENT_SUFFIXES


def _format_errors(errors: list[FieldError]) -> str:
    return "\n".join(f"  {e}" for e in errors)


class RepositoryValidator:
    """Check every calendar and event document under the data directory.

    Split calendars are directories holding the metadata file (not descended
    into further); flat calendars are any other documents outside them except
    reserved names and year partitions.
    """

    def __init__(self, config: RepositoryConfig, validator: SchemaValidator | None = None):
        self.config = config
        self.validator = validator or SchemaValidator()
        self._seen_events: dict[str, Path] = {}
        self._seen_calendars: dict[str, Path] = {}

    def _rel(self, path: Path) -> Path:
        return relative_path(path, self.config.root)

    def split_calendar_dirs(self) -> list[Path]:
        """Directories containing a metadata document, outermost only."""
        data_dir = self.config.data_dir
        if not data_dir.is_dir():
            return []
        result = []

        def walk(directory: Path) -> None:
            if (directory / self.config.metadata_filename).is_file():
                result.append(directory)
                return
            for child in sorted(directory.iterdir()):
                if child.is_dir():
                    walk(child)

        walk(data_dir)
        return sorted(result, key=str)

    def flat_calendar_files(self, split_dirs: list[Path]) -> list[Path]:
        """Candidate flat calendar documents."""
        data_dir = self.config.data_dir
        if not data_dir.is_dir():
            return []
        reserved = set(RESERVED_FILENAMES) | {self.config.metadata_filename}
        result = []
        for path in data_dir.rglob("*"):
            if not _is_document(path):
                continue
            if path.name in reserved or _YEAR_FILE.fullmatch(path.name):
                continue
            if any(d in path.parents for d in split_dirs):
                continue
            result.append(path)
        return sorted(result, key=str)

    def validate(self) -> ValidationReport:
        """Validate the whole repository."""
        self._seen_events = {}
        self._seen_calendars = {}
        report = ValidationReport()

        split_dirs = self.split_calendar_dirs()
        flat_files = self.flat_calendar_files(split_dirs)
        if not split_dirs and not flat_files:
            report.add(f"No calendars found under {self._rel(self.config.data_dir)}/.")
            return report

        for directory in split_dirs:
            self._validate_split(directory, report)
        for path in flat_files:
            self._validate_flat(path, report)

        logger.info(
            f"Validated {len(split_dirs)} split and {len(flat_files)} flat calendars: "
            f"{len(report.problems)} problems"
        )
        return report

    def _read(self, path: Path, report: ValidationReport) -> object | None:
        try:
            return read_document(path)
        except DocumentError as e:
            report.add(str(e))
            return None

    def _check_calendar_id(self, calendar_id: str, path: Path, report: ValidationReport) -> bool:
        if calendar_id in self._seen_calendars:
            report.add(
                f'Duplicate calendar_id "{calendar_id}" found in {self._rel(path)} '
                f"and {self._rel(self._seen_calendars[calendar_id])}."
            )
            return False
        self._seen_calendars[calendar_id] = path
        return True

    def _check_events(self, events: list, path: Path, report: ValidationReport) -> None:
        for event in events:
            result = self.validator.validate("event", event)
            if not result.ok:
                report.add(
                    f"{self._rel(path)} has invalid event:\n{_format_errors(result.errors)}"
                )
                continue
            event_id = event["id"]
            if event_id in self._seen_events:
                report.add(
                    f'Duplicate event id "{event_id}" found in {self._rel(path)} '
                    f"and {self._rel(self._seen_events[event_id])}."
                )
            else:
                self._seen_events[event_id] = path

    def _validate_split(self, directory: Path, report: ValidationReport) -> None:
        meta_path = directory / self.config.metadata_filename
        meta = self._read(meta_path, report)
        if meta is None:
            return

        result = self.validator.validate("calendar", meta)
        if not result.ok:
            report.add(
                f"{self._rel(meta_path)} failed schema validation:\n"
                f"{_format_errors(result.errors)}"
            )
            return
        if isinstance(meta.get(EVENTS_FIELD), list):
            report.add(f"{self._rel(meta_path)} must not include events in split mode.")
            return

        calendar_id = meta[CALENDAR_ID_FIELD]
        if calendar_id != directory.name:
            report.add(
                f'{self._rel(meta_path)} calendar_id must match directory name "{directory.name}".'
            )
        self._check_calendar_id(calendar_id, meta_path, report)

        for data_path in sorted(directory.iterdir()):
            if not _is_document(data_path) or data_path.name in RESERVED_FILENAMES:
                continue
            if data_path.name == self.config.metadata_filename:
                continue
            payload = self._read(data_path, report)
            if payload is None:
                continue
            if (
                not isinstance(payload, dict)
                or not isinstance(payload.get(CALENDAR_ID_FIELD), str)
                or not isinstance(payload.get(EVENTS_FIELD), list)
            ):
                report.add(
                    f"{self._rel(data_path)} must be an object with calendar_id and events array."
                )
                continue
            if payload[CALENDAR_ID_FIELD] != calendar_id:
                report.add(
                    f"{self._rel(data_path)} calendar_id does not match {self._rel(meta_path)}."
                )
            self._check_events(payload[EVENTS_FIELD], data_path, report)

    def _validate_flat(self, path: Path, report: ValidationReport) -> None:
        payload = self._read(path, report)
        if payload is None:
            return

        result = self.validator.validate("calendar", payload)
        if not result.ok:
            report.add(
                f"{self._rel(path)} failed schema validation:\n{_format_errors(result.errors)}"
            )
            return
        if not isinstance(payload.get(EVENTS_FIELD), list):
            report.add(f"{self._rel(path)} must include events array in flat mode.")
            return

        calendar_id = payload[CALENDAR_ID_FIELD]
        if calendar_id != path.stem:
            report.add(f'{self._rel(path)} calendar_id must match filename "{path.stem}".')
        if not self._check_calendar_id(calendar_id, path, report):
            return
        self._check_events(payload[EVENTS_FIELD], path, report)
