from __future__ import annotations

from typing import Protocol

from todo_backend.domain.entities.user import User


class UserStorePort(Protocol):
    def get_user_by_id(self, *, user_id: str) -> User | None:
        ...

    def get_user_by_email(self, *, email: str) -> User | None:
        ...

    def exists_by_email(self, *, email: str) -> bool:
        ...

    def save(self, *, user: User) -> User:
        """Insert or update by id. Raises DuplicateEmailError on an email clash."""
        ...
