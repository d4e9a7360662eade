"""Payload readers for calendar, event and patch input files."""

from calrepo.ingestion.base import PayloadReader, ReaderRegistry
from calrepo.ingestion.json_reader import JSONReader
from calrepo.ingestion.yaml_reader import YAMLReader


def setup_reader_registry() -> ReaderRegistry:
    """Set up reader registry with all payload readers."""
    registry = ReaderRegistry()
    registry.register(JSONReader(), [".json"])
    registry.register(YAMLReader(), [".yaml", ".yml"])
    return registry


__all__ = [
    "JSONReader",
    "PayloadReader",
    "ReaderRegistry",
    "YAMLReader",
    "setup_reader_registry",
]
