from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


Role = Literal["COMMON", "PREMIUM"]

ROLES: tuple[Role, ...] = ("COMMON", "PREMIUM")


@dataclass(frozen=True)
class User:
    id: str
    email: str
    password_hash: str | None
    username: str
    role: Role
    profile_image_path: str | None
    external_access_token: str | None
    created_at: datetime


@dataclass(frozen=True)
class ExternalProfile:
    external_id: str
    email: str
    nickname: str | None
    profile_image_url: str | None
