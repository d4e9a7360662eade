"""Shared Rich console instance for command output."""

from rich.console import Console

# Paths and ids are printed verbatim; no automatic highlighting
console = Console(highlight=False)
