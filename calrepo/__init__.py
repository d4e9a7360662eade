"""calrepo: a file-backed repository of calendars and their events."""

from calrepo.ingestion import setup_reader_registry

__version__ = "0.1.0"

__all__ = ["__version__", "setup_reader_registry"]
