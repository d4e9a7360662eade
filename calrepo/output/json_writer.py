"""JSON writer for listing output."""

import json


class JSONWriter:
    """Writer for JSON output."""

    def render(self, data: object) -> str:
        """Render records as indented JSON."""
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)

    def get_extension(self) -> str:
        """Returns format name."""
        return "json"
