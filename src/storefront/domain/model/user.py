"""User aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import FieldViolation, ValidationError


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class User:
    """A registered customer or administrator.

    Credentials are owned by the authentication collaborator, not by this
    aggregate.
    """

    id: str
    email: str
    name: str
    role: Role = Role.USER

    @staticmethod
    def create(id: str, email: str, name: str, role: Role = Role.USER) -> User:
        email = normalize_email(email or "")
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ValidationError(
                "Invalid user", [FieldViolation("email", "A valid email is required")]
            )
        return User(id=id, email=email, name=(name or "").strip(), role=role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
