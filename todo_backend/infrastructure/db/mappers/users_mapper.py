from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from todo_backend.domain.entities.user import User


def _as_str(value: Any) -> str:
    return str(value)


def _as_utc(value: Any) -> datetime:
    # SQLite hands back naive datetimes (sometimes as ISO strings).
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        email=row["email"],
        password_hash=row.get("password_hash"),
        username=row["username"],
        role=row["role"],
        profile_image_path=row.get("profile_image_path"),
        external_access_token=row.get("external_access_token"),
        created_at=_as_utc(row["created_at"]),
    )


def map_user_to_params(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "password_hash": user.password_hash,
        "username": user.username,
        "role": user.role,
        "profile_image_path": user.profile_image_path,
        "external_access_token": user.external_access_token,
        "created_at": user.created_at,
    }
