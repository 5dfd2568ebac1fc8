"""The authenticated caller, as handed to us by the authentication layer.

Handlers never verify credentials; they only check what an already
authenticated principal is allowed to do.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ForbiddenError
from storefront.domain.model.user import Role, User


@dataclass(frozen=True)
class Principal:
    id: str
    email: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @staticmethod
    def of(user: User) -> Principal:
        return Principal(id=user.id, email=user.email, role=user.role)


def require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")


def require_owner_or_admin(principal: Principal, owner_id: str) -> None:
    if not principal.is_admin and principal.id != owner_id:
        raise ForbiddenError("Access denied")
