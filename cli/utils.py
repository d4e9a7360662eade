"""CLI utilities for error reporting and output formatting."""

import logging
from contextlib import contextmanager
from typing import Iterator

import typer

from calrepo.exceptions import CalendarError, ValidationError
from calrepo.output import setup_writer
from cli.display.table_renderer import TableRenderer

logger = logging.getLogger(__name__)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Log calendar errors and exit with status 1."""
    try:
        yield
    except ValidationError as e:
        logger.error(f"{e.label} schema validation failed:")
        for error in e.errors:
            logger.error(f"  {error}")
        raise typer.Exit(1)
    except CalendarError as e:
        logger.error(str(e))
        raise typer.Exit(1)


def split_list(value: str | None) -> list[str] | None:
    """Split a comma-separated option into trimmed, non-empty items."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def emit(data: object, format: str, table: str = "events") -> None:
    """Print listing data as yaml, json or a rich table."""
    if format == "table":
        renderer = TableRenderer()
        if table == "calendars":
            renderer.render_calendar_list(data)
        else:
            renderer.render_event_list(data)
        return
    typer.echo(setup_writer(format).render(data), nl=False if format == "yaml" else True)
