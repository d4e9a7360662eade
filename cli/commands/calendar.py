"""Calendar commands: list, create, update, delete."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display import console
from cli.utils import emit, exit_on_error, split_list


def list_calendars(
    format: Annotated[
        str | None,
        typer.Option("--format", help="Output format: yaml, json or table"),
    ] = None,
) -> None:
    """List calendars with their storage mode and event count."""
    ctx = get_context()
    format = format or ctx.config.output_format

    with exit_on_error():
        rows = [row.to_dict() for row in ctx.repository.list_calendars()]
        emit(rows, format, table="calendars")


def create(
    calendar: Annotated[
        str,
        typer.Option("--calendar", help="Calendar ID (also the file or directory name)"),
    ],
    mode: Annotated[
        str | None,
        typer.Option("--mode", help="Storage mode: flat or split"),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option("--file", help="Calendar payload (.json, .yaml or .yml)"),
    ] = None,
    dir: Annotated[
        str | None,
        typer.Option("--dir", help="Subdirectory of data/ to create the calendar in"),
    ] = None,
    title: Annotated[str | None, typer.Option("--title", help="Calendar title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Human-readable description")
    ] = None,
    locale: Annotated[str | None, typer.Option("--locale", help="Locale, e.g. en-GB")] = None,
    timezone: Annotated[
        str | None, typer.Option("--timezone", help="IANA timezone, e.g. Europe/London")
    ] = None,
    maintainers: Annotated[
        str | None, typer.Option("--maintainers", help="Comma-separated maintainers")
    ] = None,
    tags: Annotated[str | None, typer.Option("--tags", help="Comma-separated tags")] = None,
    update_frequency: Annotated[
        str | None,
        typer.Option("--update-frequency", help="How often the calendar is refreshed"),
    ] = None,
) -> None:
    """Create a calendar.

    Flat calendars are a single data/<id>.yaml holding metadata and events.
    Split calendars are a data/<id>/ directory with calendar.yaml plus one
    events file per year.

    Example:
        calrepo calendar create --calendar conf-2025 --mode split --title "Conf"
    """
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        if file is not None:
            payload = ctx.reader_registry.read_mapping(file, "calendar")
        else:
            payload = {
                "title": title,
                "description": description,
                "locale": locale,
                "timezone": timezone,
                "maintainers": split_list(maintainers) or [],
                "tags": split_list(tags) or [],
                "update_frequency": update_frequency,
            }

        path = repository.create_calendar(
            calendar,
            payload,
            mode=mode or ctx.config.default_mode,
            subdir=dir,
        )

    console.print(
        f"[bold green]✓[/bold green] Created calendar: {repository.relative(path)}"
    )


def update(
    calendar: Annotated[
        str,
        typer.Option("--calendar", help="Calendar ID"),
    ],
    patch: Annotated[
        Path,
        typer.Option("--patch", help="Patch payload (.json, .yaml or .yml)"),
    ],
) -> None:
    """Patch calendar metadata. calendar_id cannot be changed."""
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        payload = ctx.reader_registry.read_mapping(patch, "patch")
        path = repository.update_calendar(calendar, payload)

    console.print(
        f"[bold green]✓[/bold green] Updated calendar: {repository.relative(path)}"
    )


def delete(
    calendar: Annotated[
        str,
        typer.Option("--calendar", help="Calendar ID to delete"),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", help="Confirm deletion (irreversible)"),
    ] = False,
) -> None:
    """Delete a calendar file (flat) or its whole directory (split)."""
    ctx = get_context()
    repository = ctx.repository

    with exit_on_error():
        path = repository.delete_calendar(calendar, confirm=yes)

    console.print(
        f"[bold green]✓[/bold green] Deleted calendar: {repository.relative(path)}"
    )
