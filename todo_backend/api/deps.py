from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from todo_backend.application.dto.auth import AccessTokenPayload
from todo_backend.application.ports.token_port import TokenPort
from todo_backend.application.use_cases.check_email_duplicate import CheckEmailDuplicateUseCase
from todo_backend.application.use_cases.get_profile_image_path import GetProfileImagePathUseCase
from todo_backend.application.use_cases.login_kakao import LoginKakaoUseCase
from todo_backend.application.use_cases.login_local import LoginLocalUseCase
from todo_backend.application.use_cases.logout_kakao import LogoutKakaoUseCase
from todo_backend.application.use_cases.promote_to_premium import PromoteToPremiumUseCase
from todo_backend.application.use_cases.register_user import RegisterUserUseCase
from todo_backend.domain.exceptions import TokenInvalidError
from todo_backend.infrastructure.clients.kakao_oauth_client import (
    KakaoOauthClient,
    KakaoOauthClientSettings,
)
from todo_backend.infrastructure.db.engine import get_engine
from todo_backend.infrastructure.db.repositories.users_repository import SqlUsersRepository
from todo_backend.infrastructure.security.password_hasher import PasswordHasher
from todo_backend.infrastructure.security.token_service import JwtTokenService
from todo_backend.shared.config import Settings, get_settings


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def _get_db_engine():
    settings = get_app_settings()
    if not settings.database_url:
        raise HTTPException(status_code=500, detail="DATABASE_URL is required.")
    return get_engine(settings.database_url)


def _get_users_repository() -> SqlUsersRepository:
    return SqlUsersRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    settings = get_app_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        issuer=settings.jwt_issuer,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


@lru_cache(maxsize=1)
def _get_kakao_oauth_client() -> KakaoOauthClient:
    settings = get_app_settings()
    if not settings.kakao_client_id:
        raise HTTPException(status_code=500, detail="KAKAO_CLIENT_ID is required.")
    return KakaoOauthClient(
        KakaoOauthClientSettings(
            client_id=settings.kakao_client_id,
            client_secret=settings.kakao_client_secret,
            redirect_uri=settings.kakao_redirect_uri,
            token_url=settings.kakao_token_url,
            profile_url=settings.kakao_profile_url,
            logout_url=settings.kakao_logout_url,
            timeout_seconds=settings.kakao_timeout_seconds,
        )
    )


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        user_store=_get_users_repository(),
        password_hasher=_get_password_hasher(),
    )


def get_check_email_duplicate_use_case() -> CheckEmailDuplicateUseCase:
    return CheckEmailDuplicateUseCase(user_store=_get_users_repository())


def get_login_local_use_case() -> LoginLocalUseCase:
    return LoginLocalUseCase(
        user_store=_get_users_repository(),
        password_hasher=_get_password_hasher(),
        token_port=_get_token_service(),
    )


def get_promote_to_premium_use_case() -> PromoteToPremiumUseCase:
    return PromoteToPremiumUseCase(
        user_store=_get_users_repository(),
        token_port=_get_token_service(),
    )


def get_login_kakao_use_case() -> LoginKakaoUseCase:
    return LoginKakaoUseCase(
        user_store=_get_users_repository(),
        kakao_oauth_port=_get_kakao_oauth_client(),
        token_port=_get_token_service(),
    )


def get_logout_kakao_use_case() -> LogoutKakaoUseCase:
    return LogoutKakaoUseCase(
        user_store=_get_users_repository(),
        kakao_oauth_port=_get_kakao_oauth_client(),
    )


def get_profile_image_path_use_case() -> GetProfileImagePathUseCase:
    return GetProfileImagePathUseCase(
        user_store=_get_users_repository(),
        upload_root_path=get_app_settings().upload_root_path,
    )


def get_token_service() -> TokenPort:
    return _get_token_service()


def parse_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")
    return token


def get_current_user(
    authorization: str | None = Header(default=None),
    token_service: TokenPort = Depends(get_token_service),
) -> AccessTokenPayload:
    """Trusts the signature and expiry only; the user row is not loaded here."""
    token = parse_bearer_token(authorization)
    try:
        return token_service.decode_access_token(token=token)
    except TokenInvalidError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
