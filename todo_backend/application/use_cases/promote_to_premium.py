from __future__ import annotations

from dataclasses import replace
import logging

from todo_backend.application.dto.auth import AuthTokenOutput
from todo_backend.application.ports.token_port import TokenPort
from todo_backend.application.ports.user_store_port import UserStorePort

from .auth_common import issue_token, require_user


logger = logging.getLogger(__name__)


class PromoteToPremiumUseCase:
    """Moves a user to PREMIUM and hands back a token carrying the new role.

    Promoting an already PREMIUM user is not an error. Tokens issued before the
    promotion keep their old role claim until they expire.
    """

    def __init__(self, *, user_store: UserStorePort, token_port: TokenPort):
        self._user_store = user_store
        self._token_port = token_port

    def execute(self, *, user_id: str) -> AuthTokenOutput:
        user = require_user(user_store=self._user_store, user_id=user_id)
        saved = self._user_store.save(user=replace(user, role="PREMIUM"))
        logger.info("promote_to_premium: promoted user_id=%s previous_role=%s", saved.id, user.role)
        return issue_token(user=saved, token_port=self._token_port)
