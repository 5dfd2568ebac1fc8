"""Page/limit checks shared by every listing query."""

from __future__ import annotations

from storefront.domain.exceptions import FieldViolation, ValidationError

MAX_PAGE_SIZE = 100


def check_paging(page: int, limit: int) -> None:
    violations: list[FieldViolation] = []
    if page < 1:
        violations.append(FieldViolation("page", "Page must be at least 1"))
    if not 1 <= limit <= MAX_PAGE_SIZE:
        violations.append(
            FieldViolation("limit", f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        )
    if violations:
        raise ValidationError("Validation failed", violations)
