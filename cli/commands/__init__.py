"""CLI commands package."""

from cli.commands import calendar, event
from cli.commands.validate import validate

__all__ = [
    "calendar",
    "event",
    "validate",
]
