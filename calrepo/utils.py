"""Utility functions for calrepo."""

from datetime import datetime, timezone
from pathlib import Path


def utc_timestamp(now: datetime | None = None) -> str:
    """Current UTC time as ISO-8601 with a ``Z`` suffix (millisecond precision)."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def relative_path(path: Path, root: Path) -> Path:
    """``path`` relative to ``root`` when it lies inside it, else unchanged."""
    try:
        return path.resolve().relative_to(root.resolve())
    except ValueError:
        return path
