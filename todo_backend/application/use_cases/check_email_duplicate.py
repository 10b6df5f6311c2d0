from __future__ import annotations

from todo_backend.application.ports.user_store_port import UserStorePort


class CheckEmailDuplicateUseCase:
    def __init__(self, *, user_store: UserStorePort):
        self._user_store = user_store

    def execute(self, *, email: str) -> bool:
        email = email.strip()
        if not email:
            raise ValueError("email is required.")
        return self._user_store.exists_by_email(email=email)
