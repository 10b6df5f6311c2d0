from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json_list(name: str, default: list) -> list:
    value = _env(name)
    if not value:
        return default
    return json.loads(value)


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    jwt_issuer: str
    jwt_access_ttl_minutes: int
    kakao_client_id: str
    kakao_client_secret: str
    kakao_redirect_uri: str
    kakao_token_url: str
    kakao_profile_url: str
    kakao_logout_url: str
    kakao_timeout_seconds: float
    upload_root_path: str
    cors_origins: list


def get_settings() -> Settings:
    return Settings(
        database_url=_env("DATABASE_URL", "sqlite+pysqlite:///./todo.db"),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_issuer=_env("JWT_ISSUER", "todo-backend"),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "1440")),
        kakao_client_id=_env("KAKAO_CLIENT_ID", ""),
        kakao_client_secret=_env("KAKAO_CLIENT_SECRET", ""),
        kakao_redirect_uri=_env("KAKAO_REDIRECT_URI", "http://localhost:3000/oauth/redirected/kakao"),
        kakao_token_url=_env("KAKAO_TOKEN_URL", "https://kauth.kakao.com/oauth/token"),
        kakao_profile_url=_env("KAKAO_PROFILE_URL", "https://kapi.kakao.com/v2/user/me"),
        kakao_logout_url=_env("KAKAO_LOGOUT_URL", "https://kapi.kakao.com/v1/user/logout"),
        kakao_timeout_seconds=float(_env("KAKAO_TIMEOUT_SECONDS", "10")),
        upload_root_path=_env("UPLOAD_ROOT_PATH", "./uploads"),
        cors_origins=_json_list("CORS_ORIGINS", ["*"]),
    )
