"""CLI package for the calendar repository tool."""

import logging
import sys

from calrepo.config import RepositoryConfig

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """stderr threshold: ERROR when quiet, INFO when verbose, else WARNING."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: RepositoryConfig | None = None
) -> None:
    """Send every record to the repository log file and the rest to stderr.

    The log file lives at ``<root>/<log_dir>/<log_filename>`` and receives
    DEBUG and above. Calling this again replaces the handlers.
    """
    config = config or RepositoryConfig.from_env()

    log_dir = config.root / config.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [
        logging.FileHandler(log_dir / config.log_filename),
        logging.StreamHandler(sys.stderr),
    ]
    handlers[0].setFormatter(logging.Formatter(FILE_FORMAT))
    handlers[0].setLevel(logging.DEBUG)
    handlers[1].setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers[1].setLevel(console_level(verbose, quiet))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)


def main() -> None:
    """Main entry point for the CLI."""
    from cli.parser import app

    app()


__all__ = ["console_level", "main", "setup_logging"]
