from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from todo_backend.api.deps import (
    get_check_email_duplicate_use_case,
    get_current_user,
    get_login_kakao_use_case,
    get_login_local_use_case,
    get_logout_kakao_use_case,
    get_profile_image_path_use_case,
    get_promote_to_premium_use_case,
    get_register_user_use_case,
)
from todo_backend.api.schemas.auth import (
    AuthTokenResponse,
    AuthUserResponse,
    EmailCheckResponse,
    LoginRequest,
    LogoutResponse,
    ProfileImageResponse,
    SignUpRequest,
)
from todo_backend.application.dto.auth import (
    AccessTokenPayload,
    AuthTokenOutput,
    AuthUserOutput,
    LoginKakaoInput,
    LoginLocalInput,
    RegisterUserInput,
)
from todo_backend.application.use_cases.check_email_duplicate import CheckEmailDuplicateUseCase
from todo_backend.application.use_cases.get_profile_image_path import GetProfileImagePathUseCase
from todo_backend.application.use_cases.login_kakao import LoginKakaoUseCase
from todo_backend.application.use_cases.login_local import LoginLocalUseCase
from todo_backend.application.use_cases.logout_kakao import LogoutKakaoUseCase
from todo_backend.application.use_cases.promote_to_premium import PromoteToPremiumUseCase
from todo_backend.application.use_cases.register_user import RegisterUserUseCase
from todo_backend.domain.exceptions import (
    DuplicateEmailError,
    ExternalAuthError,
    InvalidCredentialsError,
    UserNotFoundError,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_response(user: AuthUserOutput) -> AuthUserResponse:
    return AuthUserResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        role=user.role,
        profile_image_path=user.profile_image_path,
        created_at=user.created_at,
    )


def _token_response(output: AuthTokenOutput) -> AuthTokenResponse:
    return AuthTokenResponse(
        token=output.access_token,
        expires_at=output.access_expires_at,
        user=_user_response(output.user),
    )


@router.get("/check", response_model=EmailCheckResponse)
def check_email(
    email: str = Query(..., min_length=1),
    use_case: CheckEmailDuplicateUseCase = Depends(get_check_email_duplicate_use_case),
):
    try:
        duplicate = use_case.execute(email=email)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return EmailCheckResponse(duplicate=duplicate)


@router.post("", response_model=AuthUserResponse)
def sign_up(
    req: SignUpRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    try:
        output = use_case.execute(
            RegisterUserInput(
                email=req.email,
                password=req.password,
                username=req.username,
                profile_image_path=req.profile_image_path,
            )
        )
    except DuplicateEmailError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return _user_response(output.user)


@router.post("/signin", response_model=AuthTokenResponse)
def sign_in(
    req: LoginRequest,
    use_case: LoginLocalUseCase = Depends(get_login_local_use_case),
):
    try:
        output = use_case.execute(LoginLocalInput(email=req.email, password=req.password))
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return _token_response(output)


@router.put("/paid", response_model=AuthTokenResponse)
def promote_to_premium(
    current_user: AccessTokenPayload = Depends(get_current_user),
    use_case: PromoteToPremiumUseCase = Depends(get_promote_to_premium_use_case),
):
    try:
        output = use_case.execute(user_id=current_user.user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return _token_response(output)


@router.get("/kakaologin", response_model=AuthTokenResponse)
def kakao_login(
    code: str = Query(..., min_length=1),
    use_case: LoginKakaoUseCase = Depends(get_login_kakao_use_case),
):
    try:
        output = use_case.execute(LoginKakaoInput(code=code))
    except ExternalAuthError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return _token_response(output)


@router.get("/logout", response_model=LogoutResponse)
def logout(
    current_user: AccessTokenPayload = Depends(get_current_user),
    use_case: LogoutKakaoUseCase = Depends(get_logout_kakao_use_case),
):
    try:
        provider_response = use_case.execute(user_id=current_user.user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ExternalAuthError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return LogoutResponse(provider_response=provider_response)


@router.get("/load-profile", response_model=ProfileImageResponse)
def load_profile(
    current_user: AccessTokenPayload = Depends(get_current_user),
    use_case: GetProfileImagePathUseCase = Depends(get_profile_image_path_use_case),
):
    try:
        path = use_case.execute(user_id=current_user.user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    if path is None:
        raise HTTPException(status_code=404, detail="Profile image not found.")

    return ProfileImageResponse(profile_image_path=path)
