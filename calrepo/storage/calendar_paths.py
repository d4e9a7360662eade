"""Calendar paths dataclass for consistent path access."""

from dataclasses import dataclass
from pathlib import Path

from calrepo.models.calendar import StorageMode


@dataclass(frozen=True)
class CalendarPaths:
    """Where a new calendar's documents go.

    Always returns paths regardless of whether files exist.
    """

    base_dir: Path
    calendar_id: str
    metadata_filename: str
    extension: str = "yaml"

    @property
    def flat_file(self) -> Path:
        """Single document of a flat calendar (e.g. data/team.yaml)."""
        return self.base_dir / f"{self.calendar_id}.{self.extension}"

    @property
    def split_dir(self) -> Path:
        """Directory of a split calendar (e.g. data/conf-2025/)."""
        return self.base_dir / self.calendar_id

    @property
    def split_meta(self) -> Path:
        """Metadata document of a split calendar."""
        return self.split_dir / self.metadata_filename

    def destination(self, mode: StorageMode) -> Path:
        """Path that must not exist before creating a calendar in ``mode``."""
        return self.flat_file if mode == StorageMode.FLAT else self.split_dir

    def metadata(self, mode: StorageMode) -> Path:
        """Metadata document for ``mode``."""
        return self.flat_file if mode == StorageMode.FLAT else self.split_meta
