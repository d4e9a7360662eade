"""CLI application and command routing."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import calendar, event
from cli.commands.validate import validate
from cli.context import CLIContext, set_context

app = typer.Typer(
    name="calrepo",
    help="Manage a repository of calendars stored as YAML documents.",
    no_args_is_help=True,
)

calendar_app = typer.Typer(help="Create, list, update and delete calendars.", no_args_is_help=True)
calendar_app.command("list")(calendar.list_calendars)
calendar_app.command("create")(calendar.create)
calendar_app.command("update")(calendar.update)
calendar_app.command("delete")(calendar.delete)

event_app = typer.Typer(help="Create, list, update, delete and sort events.", no_args_is_help=True)
event_app.command("list")(event.list_events)
event_app.command("create")(event.create)
event_app.command("update")(event.update)
event_app.command("delete")(event.delete)
event_app.command("sort")(event.sort)

app.add_typer(calendar_app, name="calendar")
app.add_typer(event_app, name="event")
app.command("validate")(validate)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show info messages"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors"),
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Repository root (default: CALREPO_ROOT or .)"),
    ] = None,
) -> None:
    """Calendar repository tool."""
    ctx = CLIContext(verbose=verbose, quiet=quiet, root=root)
    set_context(ctx)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
