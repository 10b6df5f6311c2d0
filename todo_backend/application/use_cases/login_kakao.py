from __future__ import annotations

from dataclasses import replace
import logging
from uuid import uuid4

from todo_backend.application.dto.auth import AuthTokenOutput, LoginKakaoInput
from todo_backend.application.ports.kakao_oauth_port import KakaoOauthPort
from todo_backend.application.ports.token_port import TokenPort
from todo_backend.application.ports.user_store_port import UserStorePort
from todo_backend.domain.entities.user import ExternalProfile, User
from todo_backend.domain.exceptions import DuplicateEmailError, ExternalAuthError

from .auth_common import issue_token, utcnow


logger = logging.getLogger(__name__)


class LoginKakaoUseCase:
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        kakao_oauth_port: KakaoOauthPort,
        token_port: TokenPort,
    ):
        self._user_store = user_store
        self._kakao_oauth_port = kakao_oauth_port
        self._token_port = token_port

    def execute(self, command: LoginKakaoInput) -> AuthTokenOutput:
        code = command.code.strip()
        if not code:
            raise ValueError("code is required.")

        # Both provider calls happen before anything is written locally.
        provider_token = self._kakao_oauth_port.exchange_code(code=code)
        profile = self._kakao_oauth_port.fetch_profile(access_token=provider_token)
        email = profile.email.strip()
        if not email:
            raise ExternalAuthError("Kakao profile is missing id or email.")
        profile = replace(profile, email=email)

        if not self._user_store.exists_by_email(email=email):
            self._create_user(profile)
        else:
            logger.info("login_kakao: reusing_account email=%s", email)

        user = self._user_store.get_user_by_email(email=email)
        if user is None:
            raise RuntimeError(f"User for {email} missing after account linking.")

        user = self._user_store.save(user=replace(user, external_access_token=provider_token))
        return issue_token(user=user, token_port=self._token_port)

    def _create_user(self, profile: ExternalProfile) -> None:
        username = profile.nickname.strip() if profile.nickname else profile.email.split("@")[0]
        user = User(
            id=str(uuid4()),
            email=profile.email,
            password_hash=None,
            username=username,
            role="COMMON",
            profile_image_path=profile.profile_image_url,
            external_access_token=None,
            created_at=utcnow(),
        )
        try:
            self._user_store.save(user=user)
        except DuplicateEmailError:
            # Lost a race with a parallel login for the same email; reuse that row.
            logger.info("login_kakao: concurrent_creation email=%s", profile.email)
            return
        logger.info(
            "login_kakao: created_account user_id=%s email=%s external_id=%s",
            user.id,
            profile.email,
            profile.external_id,
        )
