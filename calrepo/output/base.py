"""Base classes for listing writers."""

from typing import Protocol


class RecordWriter(Protocol):
    """Protocol for rendering listing records as text."""

    def render(self, data: object) -> str:
        """Render records to text."""
        ...

    def get_extension(self) -> str:
        """Returns format name (e.g., 'yaml', 'json')."""
        ...
