"""YAML payload reader."""

from pathlib import Path

from calrepo.codec import read_document


class YAMLReader:
    """Reader for YAML payload files, using the repository codec."""

    def read(self, path: Path) -> object:
        """Read payload from YAML file."""
        return read_document(path)
