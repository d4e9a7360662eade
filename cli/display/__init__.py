"""Display module for rendering listing output.

It provides:
- console: Shared Rich console instance
- TableRenderer: Calendar and event list tables
- Formatting functions for event spans and tags
"""

from cli.display.console import console
from cli.display.formatters import format_tags, format_when
from cli.display.table_renderer import TableRenderer

__all__ = [
    # Console
    "console",
    # Renderers
    "TableRenderer",
    # Formatters
    "format_tags",
    "format_when",
]
