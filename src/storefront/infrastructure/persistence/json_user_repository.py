"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.user import Role, User, normalize_email
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> str:
        return str(self._file.next_numeric_id())

    def get_by_id(self, user_id: str) -> User | None:
        raw = self._file.find(lambda r: r["id"] == user_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_email(self, email: str) -> User | None:
        wanted = normalize_email(email)
        raw = self._file.find(lambda r: r["email"] == wanted)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, user: User) -> None:
        self._file.upsert(
            {
                "id": user.id,
                "email": user.email,
                "name": user.name,
                "role": user.role.value,
            }
        )

    def delete(self, user_id: str) -> None:
        self._file.remove(user_id)

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            email=raw["email"],
            name=raw["name"],
            role=Role(raw["role"]),
        )
