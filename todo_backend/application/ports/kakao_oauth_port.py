from __future__ import annotations

from typing import Protocol

from todo_backend.domain.entities.user import ExternalProfile


class KakaoOauthPort(Protocol):
    def exchange_code(self, *, code: str) -> str:
        ...

    def fetch_profile(self, *, access_token: str) -> ExternalProfile:
        ...

    def logout(self, *, access_token: str) -> str:
        ...
