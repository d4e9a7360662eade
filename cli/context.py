"""Shared CLI context with lazy-initialized dependencies."""

from pathlib import Path

from calrepo import setup_reader_registry
from calrepo.config import RepositoryConfig
from calrepo.ingestion.base import ReaderRegistry
from calrepo.storage.calendar_repository import CalendarRepository
from calrepo.storage.calendar_storage import CalendarStorage
from calrepo.validation.repository_validator import RepositoryValidator
from calrepo.validation.schema import SchemaValidator


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        rows = ctx.repository.list_calendars()
    """

    def __init__(
        self, verbose: bool = False, quiet: bool = False, root: Path | None = None
    ):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
            root: Repository root overriding CALREPO_ROOT
        """
        self.verbose = verbose
        self.quiet = quiet
        self.root = root

        # Lazy-loaded dependencies
        self._config: RepositoryConfig | None = None
        self._reader_registry: ReaderRegistry | None = None
        self._validator: SchemaValidator | None = None
        self._repository: CalendarRepository | None = None

    @property
    def config(self) -> RepositoryConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            config = RepositoryConfig.from_env()
            if self.root is not None:
                config = config.model_copy(update={"root": self.root})
            self._config = config
        return self._config

    @property
    def reader_registry(self) -> ReaderRegistry:
        """Get payload reader registry (lazy-loaded)."""
        if self._reader_registry is None:
            self._reader_registry = setup_reader_registry()
        return self._reader_registry

    @property
    def validator(self) -> SchemaValidator:
        """Get schema validator (lazy-loaded)."""
        if self._validator is None:
            self._validator = SchemaValidator()
        return self._validator

    @property
    def repository(self) -> CalendarRepository:
        """Get calendar repository (lazy-loaded)."""
        if self._repository is None:
            self._repository = CalendarRepository(
                self.config,
                CalendarStorage(self.config),
                self.validator,
            )
        return self._repository

    def repository_validator(self) -> RepositoryValidator:
        """Build a whole-repository validator."""
        return RepositoryValidator(self.config, self.validator)


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Returns:
        The global CLI context instance

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context.

    Args:
        ctx: The CLI context instance to set
    """
    global _ctx
    _ctx = ctx
