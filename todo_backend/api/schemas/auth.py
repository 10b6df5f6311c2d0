from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)
    username: str = Field(..., min_length=1, max_length=120)
    profile_image_path: str | None = Field(default=None, max_length=1024)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)


class AuthUserResponse(BaseModel):
    id: str
    email: str
    username: str
    role: Literal["COMMON", "PREMIUM"]
    profile_image_path: str | None
    created_at: datetime


class EmailCheckResponse(BaseModel):
    duplicate: bool


class AuthTokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: AuthUserResponse


class LogoutResponse(BaseModel):
    provider_response: str | None


class ProfileImageResponse(BaseModel):
    profile_image_path: str
