"""Application service: Register User use case."""

from __future__ import annotations

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.user import Role, User
from storefront.domain.repository.user_repository import UserRepository


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, email: str, name: str, role: Role = Role.USER) -> User:
        user = User.create(
            id=self._user_repo.next_id(), email=email, name=name, role=role
        )
        if self._user_repo.get_by_email(user.email) is not None:
            raise ConflictError(f"User with email '{user.email}' already exists")
        self._user_repo.save(user)
        return user
