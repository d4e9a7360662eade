"""Shared fixtures: temporary repositories and document helpers."""

import pytest

from calrepo.codec import read_document, write_document
from calrepo.config import RepositoryConfig
from calrepo.storage.calendar_repository import CalendarRepository


@pytest.fixture
def config(tmp_path):
    """Repository config rooted at a temporary directory."""
    return RepositoryConfig(root=tmp_path)


@pytest.fixture
def data_dir(config):
    """Empty data/ directory of the temporary repository."""
    config.data_dir.mkdir(parents=True, exist_ok=True)
    return config.data_dir


@pytest.fixture
def repository(config, data_dir):
    """CalendarRepository over the temporary repository."""
    return CalendarRepository(config)


@pytest.fixture
def write_doc(data_dir):
    """Write a YAML document relative to data/ and return its path."""

    def _write(relative: str, record):
        path = data_dir / relative
        write_document(path, record)
        return path

    return _write


@pytest.fixture
def read_doc():
    """Read a YAML document."""
    return read_document


@pytest.fixture
def snapshot():
    """Map every file under a directory to its bytes."""

    def _snapshot(directory):
        return {
            p.relative_to(directory): p.read_bytes()
            for p in sorted(directory.rglob("*"))
            if p.is_file()
        }

    return _snapshot
