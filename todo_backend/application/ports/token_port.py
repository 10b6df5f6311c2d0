from __future__ import annotations

from datetime import datetime
from typing import Protocol

from todo_backend.application.dto.auth import AccessTokenPayload
from todo_backend.domain.entities.user import Role


class TokenPort(Protocol):
    def create_access_token(self, *, user_id: str, role: Role, now: datetime) -> tuple[str, datetime]:
        ...

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        ...
