from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from todo_backend.application.dto.auth import AccessTokenPayload
from todo_backend.application.ports.token_port import TokenPort
from todo_backend.domain.entities.user import ROLES, Role
from todo_backend.domain.exceptions import TokenInvalidError


ALGORITHM = "HS256"


class JwtTokenService(TokenPort):
    def __init__(
        self,
        *,
        jwt_secret: str,
        issuer: str,
        access_ttl_minutes: int,
    ):
        self._jwt_secret = jwt_secret
        self._issuer = issuer
        self._access_ttl_minutes = access_ttl_minutes

    def create_access_token(self, *, user_id: str, role: Role, now: datetime) -> tuple[str, datetime]:
        exp = now + timedelta(minutes=self._access_ttl_minutes)
        payload = {
            "sub": user_id,
            "role": role,
            "type": "access",
            "iss": self._issuer,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._jwt_secret, algorithm=ALGORITHM)
        return token, exp

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                options={"require": ["sub", "iat", "exp", "iss"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenInvalidError("Access token expired.") from exc
        except jwt.PyJWTError as exc:
            raise TokenInvalidError("Invalid access token.") from exc

        if payload.get("type") != "access":
            raise TokenInvalidError("Invalid token type.")

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise TokenInvalidError("Invalid token subject.")

        role = payload.get("role")
        if role not in ROLES:
            raise TokenInvalidError("Invalid token role.")

        return AccessTokenPayload(
            user_id=user_id,
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
