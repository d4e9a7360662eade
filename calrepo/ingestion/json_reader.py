"""JSON payload reader."""

import json
from pathlib import Path

from calrepo.exceptions import DocumentError


class JSONReader:
    """Reader for JSON payload files."""

    def read(self, path: Path) -> object:
        """Read payload from JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DocumentError(f"Failed to read JSON file {path}: {e}") from e
