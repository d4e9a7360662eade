"""Event commands: list, create, update, delete, sort."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from calrepo.codec import serialize
from cli.context import get_context
from cli.display import console
from cli.utils import emit, exit_on_error

YearOption = Annotated[
    str | None,
    typer.Option("--year", help="Year partition for split calendars (YYYY)"),
]


def list_events(
    calendar: Annotated[
        str | None,
        typer.Option("--calendar", help="Only list events of this calendar"),
    ] = None,
    format: Annotated[
        str | None,
        typer.Option("--format", help="Output format: yaml, json or table"),
    ] = None,
) -> None:
    """List events in date order."""
    ctx = get_context()
    format = format or ctx.config.output_format

    with exit_on_error():
        emit(ctx.repository.list_events(calendar), format)


def create(
    calendar: Annotated[
        str,
        typer.Option("--calendar", help="Calendar ID"),
    ],
    event: Annotated[
        Path,
        typer.Option("--event", help="Event payload (.json, .yaml or .yml)"),
    ],
    year: YearOption = None,
) -> None:
    """Create an event. Its id must be unique across the repository."""
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        payload = ctx.reader_registry.read_mapping(event, "event")
        result = repository.create_event(calendar, payload, year=year)

    console.print(
        f"[bold green]✓[/bold green] Created event in {repository.relative(result.path)}"
    )


def update(
    id: Annotated[
        str,
        typer.Option("--id", help="Event ID"),
    ],
    patch: Annotated[
        Path,
        typer.Option("--patch", help="Patch payload (.json, .yaml or .yml)"),
    ],
    year: YearOption = None,
) -> None:
    """Patch an event, moving it to another year file if its date changes."""
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        payload = ctx.reader_registry.read_mapping(patch, "patch")
        result = repository.update_event(id, payload, year=year)

    if result.moved:
        console.print(
            f"[bold green]✓[/bold green] Updated event and moved to "
            f"{repository.relative(result.path)}"
        )
    else:
        console.print(
            f"[bold green]✓[/bold green] Updated event in {repository.relative(result.path)}"
        )


def delete(
    id: Annotated[
        str,
        typer.Option("--id", help="Event ID"),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", help="Confirm deletion"),
    ] = False,
) -> None:
    """Delete an event."""
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        path = repository.delete_event(id, confirm=yes)

    console.print(
        f"[bold green]✓[/bold green] Deleted event from {repository.relative(path)}"
    )


def sort(
    calendar: Annotated[
        str | None,
        typer.Option("--calendar", help="Only sort this calendar's files"),
    ] = None,
) -> None:
    """Re-sort events in every file (or one calendar's files)."""
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        touched = repository.sort_events(calendar)

    summary = {
        "sorted_files": len(touched),
        "files": [
            {"path": str(repository.relative(f.path)), "count": f.count} for f in touched
        ],
    }
    typer.echo(serialize(summary), nl=False)
