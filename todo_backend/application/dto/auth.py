from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from todo_backend.domain.entities.user import Role


@dataclass(frozen=True)
class AuthUserOutput:
    id: str
    email: str
    username: str
    role: Role
    profile_image_path: str | None
    created_at: datetime


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    password: str
    username: str
    profile_image_path: str | None = None


@dataclass(frozen=True)
class RegisterUserOutput:
    user: AuthUserOutput


@dataclass(frozen=True)
class LoginLocalInput:
    email: str
    password: str


@dataclass(frozen=True)
class LoginKakaoInput:
    code: str


@dataclass(frozen=True)
class AuthTokenOutput:
    user: AuthUserOutput
    access_token: str
    access_expires_at: datetime


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: str
    role: Role
    issued_at: datetime
    expires_at: datetime
