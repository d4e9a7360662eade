"""Record and repository validation."""

from calrepo.validation.repository_validator import RepositoryValidator, ValidationReport
from calrepo.validation.schema import SchemaValidator, ValidationResult

__all__ = [
    "RepositoryValidator",
    "SchemaValidator",
    "ValidationReport",
    "ValidationResult",
]
