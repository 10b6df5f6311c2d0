from __future__ import annotations

import logging
from uuid import uuid4

from todo_backend.application.dto.auth import RegisterUserInput, RegisterUserOutput
from todo_backend.application.ports.password_hasher_port import PasswordHasherPort
from todo_backend.application.ports.user_store_port import UserStorePort
from todo_backend.domain.entities.user import User
from todo_backend.domain.exceptions import DuplicateEmailError

from .auth_common import build_auth_user_output, utcnow


logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        password_hasher: PasswordHasherPort,
    ):
        self._user_store = user_store
        self._password_hasher = password_hasher

    def execute(self, command: RegisterUserInput) -> RegisterUserOutput:
        email = command.email.strip()
        username = command.username.strip()

        if not email:
            raise ValueError("email is required.")
        if not username:
            raise ValueError("username is required.")
        if not command.password:
            raise ValueError("password is required.")

        if self._user_store.exists_by_email(email=email):
            logger.info("register_user: duplicate_email email=%s", email)
            raise DuplicateEmailError("Email already in use.")

        user = User(
            id=str(uuid4()),
            email=email,
            password_hash=self._password_hasher.hash(command.password),
            username=username,
            role="COMMON",
            profile_image_path=command.profile_image_path,
            external_access_token=None,
            created_at=utcnow(),
        )
        # A concurrent signup can still win between the check and the insert;
        # the store reports that as DuplicateEmailError too.
        saved = self._user_store.save(user=user)
        logger.info("register_user: created user_id=%s email=%s", saved.id, saved.email)
        return RegisterUserOutput(user=build_auth_user_output(saved))
