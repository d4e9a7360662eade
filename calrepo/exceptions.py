"""Exception hierarchy for calendar repository operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single schema error: dotted field path and message."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class CalendarError(Exception):
    """Base exception for calendar repository operations."""

    pass


class NotFoundError(CalendarError):
    """Calendar or event id absent from the repository."""

    pass


class CalendarNotFoundError(NotFoundError):
    """Calendar not found."""

    pass


class EventNotFoundError(NotFoundError):
    """Event not found."""

    pass


class ConflictError(CalendarError):
    """Duplicate id or destination path already exists."""

    pass


class ValidationError(CalendarError):
    """Schema validation error with the offending fields attached."""

    def __init__(self, label: str, errors: list[FieldError]):
        self.label = label
        self.errors = list(errors)
        detail = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{label} schema validation failed: {detail}")


class InvalidPlacementError(CalendarError):
    """No year can be derived for a split-mode event."""

    pass


class ImmutableFieldError(CalendarError):
    """Patch attempted to change an identity field."""

    pass


class InvalidArgumentError(CalendarError):
    """Missing or malformed argument or payload."""

    pass


class UnsupportedFormatError(CalendarError):
    """File format not supported."""

    pass


class DocumentError(CalendarError):
    """Document could not be read or parsed."""

    pass
