from __future__ import annotations

from dataclasses import replace
import logging

from todo_backend.application.dto.auth import AuthTokenOutput, LoginLocalInput
from todo_backend.application.ports.password_hasher_port import PasswordHasherPort
from todo_backend.application.ports.token_port import TokenPort
from todo_backend.application.ports.user_store_port import UserStorePort
from todo_backend.domain.exceptions import InvalidCredentialsError, UserNotFoundError

from .auth_common import issue_token


logger = logging.getLogger(__name__)


class LoginLocalUseCase:
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
    ):
        self._user_store = user_store
        self._password_hasher = password_hasher
        self._token_port = token_port

    def execute(self, command: LoginLocalInput) -> AuthTokenOutput:
        user = self._user_store.get_user_by_email(email=command.email.strip())
        if user is None:
            raise UserNotFoundError("No account registered for this email.")

        # Social-only accounts never set a local password.
        if not user.password_hash:
            raise InvalidCredentialsError("Password does not match.")

        verified, replacement_hash = self._password_hasher.verify_and_update(
            command.password,
            user.password_hash,
        )
        if not verified:
            raise InvalidCredentialsError("Password does not match.")

        if replacement_hash:
            user = self._user_store.save(user=replace(user, password_hash=replacement_hash))
            logger.info("login_local: password_hash_upgraded user_id=%s", user.id)

        logger.info("login_local: success user_id=%s", user.id)
        return issue_token(user=user, token_port=self._token_port)
