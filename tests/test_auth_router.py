from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from todo_backend.api.deps import (
    get_check_email_duplicate_use_case,
    get_login_kakao_use_case,
    get_login_local_use_case,
    get_logout_kakao_use_case,
    get_profile_image_path_use_case,
    get_promote_to_premium_use_case,
    get_register_user_use_case,
    get_token_service,
)
from todo_backend.application.dto.auth import AuthTokenOutput, AuthUserOutput
from todo_backend.application.use_cases.login_local import LoginLocalUseCase
from todo_backend.application.use_cases.register_user import RegisterUserUseCase
from todo_backend.domain.exceptions import (
    DuplicateEmailError,
    ExternalAuthError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from todo_backend.infrastructure.db.engine import create_schema
from todo_backend.infrastructure.db.repositories.users_repository import SqlUsersRepository
from todo_backend.infrastructure.security.password_hasher import PasswordHasher
from todo_backend.infrastructure.security.token_service import JwtTokenService
from todo_backend.main import app


TOKEN_SERVICE = JwtTokenService(
    jwt_secret="router-test-secret-with-enough-length-01",
    issuer="todo-backend",
    access_ttl_minutes=30,
)


def _user_output(role: str = "COMMON") -> AuthUserOutput:
    return AuthUserOutput(
        id="user-1",
        email="a@x.com",
        username="Kim",
        role=role,
        profile_image_path=None,
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )


def _token_output(role: str = "COMMON") -> AuthTokenOutput:
    token, expires_at = TOKEN_SERVICE.create_access_token(
        user_id="user-1",
        role=role,
        now=datetime.now(timezone.utc),
    )
    return AuthTokenOutput(user=_user_output(role), access_token=token, access_expires_at=expires_at)


def _bearer(role: str = "COMMON") -> dict[str, str]:
    return {"Authorization": f"Bearer {_token_output(role).access_token}"}


class FakeUseCase:
    def __init__(self, result=None, error: Exception | None = None):
        self._result = result
        self._error = error
        self.calls: list = []

    def execute(self, *args, **kwargs):
        self.calls.append(args or kwargs)
        if self._error is not None:
            raise self._error
        return self._result


@pytest.fixture()
def client():
    app.dependency_overrides[get_token_service] = lambda: TOKEN_SERVICE
    yield TestClient(app)
    app.dependency_overrides.clear()


def _override(dependency, use_case: FakeUseCase) -> FakeUseCase:
    app.dependency_overrides[dependency] = lambda: use_case
    return use_case


def test_check_email_reports_duplicate(client: TestClient):
    _override(get_check_email_duplicate_use_case, FakeUseCase(result=True))

    response = client.get("/api/auth/check", params={"email": "a@x.com"})

    assert response.status_code == 200
    assert response.json() == {"duplicate": True}


def test_signup_returns_user(client: TestClient):
    class _Output:
        user = _user_output()

    use_case = _override(get_register_user_use_case, FakeUseCase(result=_Output()))

    response = client.post(
        "/api/auth",
        json={"email": "a@x.com", "password": "password1", "username": "Kim"},
    )

    assert response.status_code == 200
    assert response.json()["role"] == "COMMON"
    (command,) = use_case.calls[0]
    assert command.password == "password1"


def test_signup_duplicate_is_conflict(client: TestClient):
    _override(get_register_user_use_case, FakeUseCase(error=DuplicateEmailError("Email already in use.")))

    response = client.post(
        "/api/auth",
        json={"email": "a@x.com", "password": "password1", "username": "Kim"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already in use."


def test_signin_returns_token_that_validates(client: TestClient):
    _override(get_login_local_use_case, FakeUseCase(result=_token_output()))

    response = client.post("/api/auth/signin", json={"email": "a@x.com", "password": "pw1"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert TOKEN_SERVICE.decode_access_token(token=body["token"]).user_id == body["user"]["id"]


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (UserNotFoundError("No account registered for this email."), 404),
        (InvalidCredentialsError("Password does not match."), 401),
    ],
)
def test_signin_failures(client: TestClient, error: Exception, status_code: int):
    _override(get_login_local_use_case, FakeUseCase(error=error))

    response = client.post("/api/auth/signin", json={"email": "a@x.com", "password": "wrong"})

    assert response.status_code == status_code
    assert "wrong" not in response.text


def test_paid_uses_subject_from_token(client: TestClient):
    use_case = _override(get_promote_to_premium_use_case, FakeUseCase(result=_token_output("PREMIUM")))

    response = client.put("/api/auth/paid", headers=_bearer())

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "PREMIUM"
    assert use_case.calls == [{"user_id": "user-1"}]


def test_paid_without_token_is_unauthorized(client: TestClient):
    _override(get_promote_to_premium_use_case, FakeUseCase(result=_token_output("PREMIUM")))

    response = client.put("/api/auth/paid")

    assert response.status_code == 401


def test_paid_with_expired_token_is_unauthorized(client: TestClient):
    _override(get_promote_to_premium_use_case, FakeUseCase(result=_token_output("PREMIUM")))
    expired, _ = TOKEN_SERVICE.create_access_token(
        user_id="user-1",
        role="COMMON",
        now=datetime.now(timezone.utc) - timedelta(days=1),
    )

    response = client.put("/api/auth/paid", headers={"Authorization": f"Bearer {expired}"})

    assert response.status_code == 401


def test_kakao_login_provider_failure_is_bad_gateway(client: TestClient):
    _override(get_login_kakao_use_case, FakeUseCase(error=ExternalAuthError("Kakao token_exchange timed out.")))

    response = client.get("/api/auth/kakaologin", params={"code": "auth-code"})

    assert response.status_code == 502


def test_kakao_login_returns_token(client: TestClient):
    _override(get_login_kakao_use_case, FakeUseCase(result=_token_output()))

    response = client.get("/api/auth/kakaologin", params={"code": "auth-code"})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "a@x.com"


def test_logout_passes_provider_body_through(client: TestClient):
    _override(get_logout_kakao_use_case, FakeUseCase(result='{"id":123}'))

    response = client.get("/api/auth/logout", headers=_bearer())

    assert response.status_code == 200
    assert response.json() == {"provider_response": '{"id":123}'}


def test_load_profile_not_found_without_image(client: TestClient):
    _override(get_profile_image_path_use_case, FakeUseCase(result=None))

    response = client.get("/api/auth/load-profile", headers=_bearer())

    assert response.status_code == 404


def test_load_profile_returns_path(client: TestClient):
    _override(get_profile_image_path_use_case, FakeUseCase(result="/srv/uploads/abc_me.png"))

    response = client.get("/api/auth/load-profile", headers=_bearer())

    assert response.status_code == 200
    assert response.json() == {"profile_image_path": "/srv/uploads/abc_me.png"}


def test_signup_with_short_password_then_signin(client: TestClient):
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    repository = SqlUsersRepository(engine)
    hasher = PasswordHasher()
    app.dependency_overrides[get_register_user_use_case] = lambda: RegisterUserUseCase(
        user_store=repository,
        password_hasher=hasher,
    )
    app.dependency_overrides[get_login_local_use_case] = lambda: LoginLocalUseCase(
        user_store=repository,
        password_hasher=hasher,
        token_port=TOKEN_SERVICE,
    )

    signup = client.post("/api/auth", json={"email": "a@x.com", "password": "pw1", "username": "Kim"})
    duplicate = client.post("/api/auth", json={"email": "a@x.com", "password": "pw2", "username": "Kim"})
    signin = client.post("/api/auth/signin", json={"email": "a@x.com", "password": "pw1"})

    assert signup.status_code == 200
    assert signup.json()["role"] == "COMMON"
    assert duplicate.status_code == 409
    assert signin.status_code == 200
    assert TOKEN_SERVICE.decode_access_token(token=signin.json()["token"]).user_id == signup.json()["id"]


def test_signup_with_empty_password_is_rejected(client: TestClient):
    _override(get_register_user_use_case, FakeUseCase(result=None))

    response = client.post("/api/auth", json={"email": "a@x.com", "password": "", "username": "Kim"})

    assert response.status_code == 422
