"""
API v1 routes.

Defines REST endpoints for the registration confirmation workflow and
session issuance. Endpoints are sync functions: the services block on
bcrypt and the database, so FastAPI runs them on its thread pool.
"""

from fastapi import APIRouter, Depends, status

from vestra.api.dependencies import (
    get_bearer_token,
    get_locale,
    get_registration_service,
    get_session_service,
)
from vestra.api.errors import to_http_exception
from vestra.api.messages import translate
from vestra.api.models import (
    ConfirmRequest,
    ConfirmResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from vestra.domain.exceptions import AuthError
from vestra.domain.registration import RegistrationService
from vestra.domain.sessions import SessionService

router = APIRouter(prefix="/auth", tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Confirmation email not sent"},
        503: {"model": ErrorResponse, "description": "Database unavailable"},
    },
    summary="Register a new user",
    description="Submit name, email and password to begin registration. "
    "A 6-digit confirmation code will be sent to the provided email.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
    locale: str = Depends(get_locale),
) -> RegisterResponse:
    """
    Register a new user and send a confirmation code.

    - **name**: Optional display name
    - **email**: Email address to register
    - **password**: Password (minimum 8 characters)
    - **password_confirmation**: Must match password
    """
    try:
        normalized_email = service.register(
            request_data.email,
            request_data.password,
            request_data.password_confirmation,
            name=request_data.name,
        )
    except AuthError as exc:
        raise to_http_exception(exc, locale) from None
    return RegisterResponse(
        message=translate("code_sent", locale),
        email=normalized_email,
        expires_in_seconds=service.code_ttl_seconds,
    )


@router.post(
    "/confirm",
    response_model=ConfirmResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid code or data not found"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        410: {"model": ErrorResponse, "description": "Confirmation code expired"},
        503: {"model": ErrorResponse, "description": "Database unavailable"},
    },
    summary="Confirm registration with the emailed code",
    description="Submit the 6-digit code received by email to create the account.",
)
def confirm(
    request_data: ConfirmRequest,
    service: RegistrationService = Depends(get_registration_service),
    locale: str = Depends(get_locale),
) -> ConfirmResponse:
    try:
        user = service.confirm(request_data.email, request_data.confirmation_code)
    except AuthError as exc:
        raise to_http_exception(exc, locale) from None
    return ConfirmResponse(
        message=translate("account_created", locale),
        user=UserResponse.from_user(user),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Incorrect email or password"},
        403: {"model": ErrorResponse, "description": "Account disabled"},
        503: {"model": ErrorResponse, "description": "Database unavailable"},
    },
    summary="Log in and obtain a session token",
    description="Verify email and password and open a 30-day session. "
    "The returned token is the bearer credential for subsequent requests.",
)
def login(
    request_data: LoginRequest,
    service: SessionService = Depends(get_session_service),
    locale: str = Depends(get_locale),
) -> LoginResponse:
    # Unknown email and wrong password share one message (no enumeration)
    try:
        result = service.login(request_data.email, request_data.password)
    except AuthError as exc:
        raise to_http_exception(exc, locale) from None
    return LoginResponse(
        message=translate("login_succeeded", locale),
        user=UserResponse.from_user(result.user),
        session_token=result.session.token,
        expires_at=result.session.expires_at,
    )


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid or expired session"},
        403: {"model": ErrorResponse, "description": "Account disabled"},
    },
    summary="Current user",
    description="Resolve the bearer session token to its user.",
)
def me(
    token: str | None = Depends(get_bearer_token),
    service: SessionService = Depends(get_session_service),
    locale: str = Depends(get_locale),
) -> UserResponse:
    try:
        user = service.authenticate(token)
    except AuthError as exc:
        raise to_http_exception(exc, locale) from None
    return UserResponse.from_user(user)
