"""Domain-level exceptions.

Every failure a caller can observe is a subclass of DomainException so the
CLI layer can catch them uniformly and render a structured error payload.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldViolation:
    """A single per-field problem found while validating input."""

    field: str
    message: str


class DomainException(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""

    def __init__(
        self,
        message: str,
        violations: list[FieldViolation] | None = None,
    ) -> None:
        super().__init__(message)
        self.violations = list(violations or [])

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.violations:
            payload["details"] = [
                {"field": v.field, "message": v.message} for v in self.violations
            ]
        return payload


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """Duplicate key, insufficient stock, or an operation blocked by references."""


class ForbiddenError(DomainException):
    """The caller's role or ownership does not allow the operation."""


class PersistenceError(DomainException):
    """The persistence collaborator failed unexpectedly."""
