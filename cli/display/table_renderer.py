"""Table renderer for calendar and event lists."""

from rich.markup import escape
from rich.table import Table

from cli.display.console import console
from cli.display.formatters import format_tags, format_when


class TableRenderer:
    """Render tables for calendar and event lists.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def render_calendar_list(self, calendars: list[dict]) -> None:
        """Render calendar listing rows as a table.

        Args:
            calendars: Rows with calendar_id, title, mode, events and path.
        """
        if not calendars:
            console.print("No calendars found")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("ID", style="cyan")
        table.add_column("TITLE")
        table.add_column("MODE", style="dim")
        table.add_column("EVENTS", justify="right")
        table.add_column("PATH", style="dim")

        for cal in calendars:
            path = escape(cal["path"]) if cal["path"] else "[yellow](no metadata)[/yellow]"
            table.add_row(
                escape(cal["calendar_id"]),
                escape(cal["title"] or "-"),
                cal["mode"],
                str(cal["events"]),
                path,
            )

        console.print(table)

    def render_event_list(self, events: list[dict]) -> None:
        """Render event listing rows as a table.

        Args:
            events: Event records tagged with calendar_id.
        """
        if not events:
            console.print("No events found")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("WHEN")
        table.add_column("ID", style="cyan")
        table.add_column("TITLE")
        table.add_column("CALENDAR", style="dim")
        table.add_column("TAGS", style="dim")

        for event in events:
            table.add_row(
                escape(format_when(event)),
                escape(str(event.get("id", "-"))),
                escape(str(event.get("title") or "-")),
                escape(str(event.get("calendar_id", "-"))),
                escape(format_tags(event.get("tags"))),
            )

        console.print(table)
