"""Validate every calendar and event in the repository."""

import logging

import typer

from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def validate() -> None:
    """Validate the whole repository and report every problem found."""
    ctx = get_context()

    report = ctx.repository_validator().validate()
    if not report.ok:
        for problem in report.problems:
            logger.error(problem)
        logger.error(f"Validation failed with {len(report.problems)} problem(s).")
        raise typer.Exit(1)

    console.print("[bold green]✓[/bold green] Validation passed.")
