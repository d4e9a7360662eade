"""Schema validation of calendar and event records."""

from dataclasses import dataclass, field

import pydantic

from calrepo.exceptions import FieldError, InvalidArgumentError, ValidationError
from calrepo.models.calendar import CalendarRecord
from calrepo.models.event import EventRecord

SCHEMAS: dict[str, type[pydantic.BaseModel]] = {
    "calendar": CalendarRecord,
    "event": EventRecord,
}


@dataclass
class ValidationResult:
    """Outcome of validating one record."""

    ok: bool
    errors: list[FieldError] = field(default_factory=list)


def _field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    return [
        FieldError(path=".".join(str(part) for part in err["loc"]), message=err["msg"])
        for err in exc.errors()
    ]


class SchemaValidator:
    """Validate plain records against the calendar or event schema."""

    def validate(self, schema_name: str, record: object) -> ValidationResult:
        """Validate ``record`` and collect every field error."""
        model = SCHEMAS.get(schema_name)
        if model is None:
            raise InvalidArgumentError(f"Unknown schema: {schema_name}")
        if not isinstance(record, dict):
            return ValidationResult(
                ok=False, errors=[FieldError(path="", message="must be an object")]
            )
        try:
            model.model_validate(record)
        except pydantic.ValidationError as e:
            return ValidationResult(ok=False, errors=_field_errors(e))
        return ValidationResult(ok=True)

    def ensure_valid(self, schema_name: str, record: object, label: str) -> None:
        """Raise ValidationError unless ``record`` is valid."""
        result = self.validate(schema_name, record)
        if not result.ok:
            raise ValidationError(label, result.errors)
