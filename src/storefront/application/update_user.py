"""Application service: Update User use case (admin only).

Email is the login identity and stays fixed; only the display name and
role can change.
"""

from __future__ import annotations

import logging

from storefront.application.auth import Principal, require_admin
from storefront.domain.exceptions import (
    EntityNotFoundError,
    FieldViolation,
    ValidationError,
)
from storefront.domain.model.user import Role, User
from storefront.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UpdateUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(
        self,
        principal: Principal,
        user_id: str,
        name: str | None = None,
        role: Role | None = None,
    ) -> User:
        require_admin(principal)

        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User with ID '{user_id}' not found")

        if name is not None:
            if not name.strip():
                raise ValidationError(
                    "Validation failed", [FieldViolation("name", "Name cannot be empty")]
                )
            user.name = name.strip()
        if role is not None and role != user.role:
            logger.info(
                "User %s role changed from %s to %s by %s",
                user.email,
                user.role.value,
                role.value,
                principal.email,
            )
            user.role = role

        self._user_repo.save(user)
        return user
