from __future__ import annotations

from dataclasses import dataclass
import logging

import httpx

from todo_backend.application.ports.kakao_oauth_port import KakaoOauthPort
from todo_backend.domain.entities.user import ExternalProfile
from todo_backend.domain.exceptions import ExternalAuthError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KakaoOauthClientSettings:
    client_id: str
    client_secret: str
    redirect_uri: str
    token_url: str
    profile_url: str
    logout_url: str
    timeout_seconds: float


class KakaoOauthClient(KakaoOauthPort):
    """Authorization-code flow against Kakao.

    Each call is a single blocking round-trip with an explicit timeout. Nothing
    is retried: transport errors, timeouts, non-2xx answers and malformed bodies
    all surface as ExternalAuthError.
    """

    def __init__(
        self,
        settings: KakaoOauthClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    def exchange_code(self, *, code: str) -> str:
        form = {
            "grant_type": "authorization_code",
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.redirect_uri,
            "code": code,
            "client_secret": self._settings.client_secret,
        }
        payload = self._request_json(
            "POST",
            self._settings.token_url,
            step="token_exchange",
            data=form,
        )
        access_token = payload.get("access_token")
        if not access_token or not isinstance(access_token, str):
            logger.warning("kakao_oauth_client: token_exchange_missing_access_token")
            raise ExternalAuthError("Kakao token response has no access_token.")
        return access_token

    def fetch_profile(self, *, access_token: str) -> ExternalProfile:
        payload = self._request_json(
            "GET",
            self._settings.profile_url,
            step="fetch_profile",
            headers=_bearer(access_token),
        )
        return _parse_profile(payload)

    def logout(self, *, access_token: str) -> str:
        response = self._send(
            "POST",
            self._settings.logout_url,
            step="logout",
            headers=_bearer(access_token),
        )
        return response.text

    def _request_json(self, method: str, url: str, *, step: str, **kwargs) -> dict:
        response = self._send(method, url, step=step, **kwargs)
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("kakao_oauth_client: %s_invalid_json", step)
            raise ExternalAuthError(f"Kakao {step} returned a non-JSON body.") from exc
        if not isinstance(payload, dict):
            raise ExternalAuthError(f"Kakao {step} returned an unexpected body.")
        return payload

    def _send(self, method: str, url: str, *, step: str, **kwargs) -> httpx.Response:
        try:
            with httpx.Client(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("kakao_oauth_client: %s_timeout timeout_seconds=%s", step, self._settings.timeout_seconds)
            raise ExternalAuthError(f"Kakao {step} timed out.") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning("kakao_oauth_client: %s_failed status=%s", step, exc.response.status_code)
            raise ExternalAuthError(
                f"Kakao {step} failed with status {exc.response.status_code}."
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("kakao_oauth_client: %s_transport_error error=%s", step, type(exc).__name__)
            raise ExternalAuthError(f"Kakao {step} request failed.") from exc
        return response


def _bearer(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _as_object(value) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ExternalAuthError("Kakao profile is missing id or email.")
    return value


def _parse_profile(payload: dict) -> ExternalProfile:
    external_id = payload.get("id")
    account = _as_object(payload.get("kakao_account"))
    properties = _as_object(payload.get("properties"))
    profile = _as_object(account.get("profile"))

    email = account.get("email")
    if external_id is None or not email or not isinstance(email, str):
        raise ExternalAuthError("Kakao profile is missing id or email.")

    nickname = profile.get("nickname") or properties.get("nickname")
    image_url = profile.get("profile_image_url") or properties.get("profile_image")
    return ExternalProfile(
        external_id=str(external_id),
        email=email,
        nickname=nickname if isinstance(nickname, str) else None,
        profile_image_url=image_url if isinstance(image_url, str) else None,
    )
