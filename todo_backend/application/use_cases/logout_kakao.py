from __future__ import annotations

import logging

from todo_backend.application.ports.kakao_oauth_port import KakaoOauthPort
from todo_backend.application.ports.user_store_port import UserStorePort

from .auth_common import require_user


logger = logging.getLogger(__name__)


class LogoutKakaoUseCase:
    def __init__(self, *, user_store: UserStorePort, kakao_oauth_port: KakaoOauthPort):
        self._user_store = user_store
        self._kakao_oauth_port = kakao_oauth_port

    def execute(self, *, user_id: str) -> str | None:
        user = require_user(user_store=self._user_store, user_id=user_id)
        if not user.external_access_token:
            return None
        # Local tokens are not revoked; they stay valid until they expire.
        body = self._kakao_oauth_port.logout(access_token=user.external_access_token)
        logger.info("logout_kakao: provider_logout user_id=%s", user.id)
        return body
