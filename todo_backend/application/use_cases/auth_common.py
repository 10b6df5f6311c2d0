from __future__ import annotations

from datetime import datetime, timezone

from todo_backend.application.dto.auth import AuthTokenOutput, AuthUserOutput
from todo_backend.application.ports.token_port import TokenPort
from todo_backend.application.ports.user_store_port import UserStorePort
from todo_backend.domain.entities.user import User
from todo_backend.domain.exceptions import UserNotFoundError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_auth_user_output(user: User) -> AuthUserOutput:
    return AuthUserOutput(
        id=user.id,
        email=user.email,
        username=user.username,
        role=user.role,
        profile_image_path=user.profile_image_path,
        created_at=user.created_at,
    )


def require_user(*, user_store: UserStorePort, user_id: str) -> User:
    user = user_store.get_user_by_id(user_id=user_id)
    if user is None:
        raise UserNotFoundError("User not found.")
    return user


def issue_token(*, user: User, token_port: TokenPort) -> AuthTokenOutput:
    access_token, access_expires_at = token_port.create_access_token(
        user_id=user.id,
        role=user.role,
        now=utcnow(),
    )
    return AuthTokenOutput(
        user=build_auth_user_output(user),
        access_token=access_token,
        access_expires_at=access_expires_at,
    )
