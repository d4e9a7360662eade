"""Base classes for payload readers."""

from pathlib import Path
from typing import Dict, List, Protocol

from calrepo.exceptions import InvalidArgumentError, UnsupportedFormatError


class PayloadReader(Protocol):
    """Protocol for payload readers."""

    def read(self, path: Path) -> object:
        """Read a payload from file path."""
        ...


class ReaderRegistry:
    """Registry for payload readers by file extension."""

    def __init__(self):
        """Initialize registry."""
        self._readers: Dict[str, PayloadReader] = {}

    def register(self, reader: PayloadReader, extensions: List[str]) -> None:
        """Register reader for file extensions."""
        for ext in extensions:
            # Normalize extension (remove leading dot, lowercase)
            normalized_ext = ext.lstrip(".").lower()
            self._readers[normalized_ext] = reader

    def get_reader(self, path: Path) -> PayloadReader:
        """Get reader by file extension."""
        ext = path.suffix.lstrip(".").lower()
        if ext not in self._readers:
            supported = ", ".join(f".{e}" for e in sorted(self._readers))
            raise UnsupportedFormatError(
                f"Unsupported file format: .{ext}. Supported formats: {supported}"
            )
        return self._readers[ext]

    def read_mapping(self, path: Path, label: str) -> dict:
        """Read a payload that must be a mapping (patch, event, calendar)."""
        payload = self.get_reader(path).read(path)
        if not isinstance(payload, dict):
            raise InvalidArgumentError(f"Invalid {label} payload in {path}")
        return payload
