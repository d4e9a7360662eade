"""Writers for listing output."""

from calrepo.exceptions import UnsupportedFormatError
from calrepo.output.base import RecordWriter
from calrepo.output.json_writer import JSONWriter
from calrepo.output.yaml_writer import YAMLWriter


def setup_writer(format: str) -> RecordWriter:
    """Get writer for format."""
    if format == "yaml":
        return YAMLWriter()
    elif format == "json":
        return JSONWriter()
    else:
        raise UnsupportedFormatError(f"Unsupported output format: {format}")


__all__ = ["JSONWriter", "RecordWriter", "YAMLWriter", "setup_writer"]
