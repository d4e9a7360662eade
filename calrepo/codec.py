"""YAML document codec for repository files.

Timestamps are not implicitly resolved: ``2025-03-01`` and
``2025-03-01T10:00:00Z`` load as strings and dump unquoted, so ordering and
year partitioning can work on the raw ISO text.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from calrepo.exceptions import DocumentError

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


def _without_timestamps(resolvers: dict) -> dict:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != _TIMESTAMP_TAG]
        for first, entries in resolvers.items()
    }


class DocumentLoader(yaml.SafeLoader):
    """Safe loader that keeps dates and datetimes as strings."""


class DocumentDumper(yaml.SafeDumper):
    """Safe dumper matching DocumentLoader's scalar resolution."""

    def increase_indent(self, flow=False, indentless=False):
        # Indent sequences under their parent key
        return super().increase_indent(flow, False)


DocumentLoader.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeLoader.yaml_implicit_resolvers
)
DocumentDumper.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeDumper.yaml_implicit_resolvers
)


def parse(text: str) -> Any:
    """Parse YAML text into a record."""
    return yaml.load(text, Loader=DocumentLoader)


def serialize(record: Any) -> str:
    """Serialize a record to YAML text, preserving key order."""
    return yaml.dump(
        record,
        Dumper=DocumentDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def read_document(path: Path) -> Any:
    """Read and parse a document from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Failed to read {path}: {e}") from e
    try:
        return parse(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Failed to parse {path}: {e}") from e


def write_document(path: Path, record: Any) -> None:
    """Overwrite a document atomically via a sibling temp file."""
    text = serialize(record)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote {path}")
