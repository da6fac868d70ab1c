"""
Error translation - Domain exceptions to HTTP responses.

Expected failures are raised by the domain as AuthError subclasses and
mapped here to a status code and a localized message. Anything else is
logged server-side and returned as a generic 500.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vestra.api.messages import negotiate_locale, translate
from vestra.config.settings import get_settings
from vestra.domain.exceptions import (
    AccountDisabled,
    AuthError,
    ConfirmationCodeExpired,
    EmailAlreadyRegistered,
    EmailDeliveryFailed,
    InvalidConfirmationCode,
    InvalidCredentials,
    InvalidSession,
    PendingRegistrationNotFound,
    StoreUnavailable,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[AuthError], int] = {
    ValidationFailed: status.HTTP_400_BAD_REQUEST,
    InvalidConfirmationCode: status.HTTP_400_BAD_REQUEST,
    PendingRegistrationNotFound: status.HTTP_400_BAD_REQUEST,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    InvalidSession: status.HTTP_401_UNAUTHORIZED,
    AccountDisabled: status.HTTP_403_FORBIDDEN,
    EmailAlreadyRegistered: status.HTTP_409_CONFLICT,
    ConfirmationCodeExpired: status.HTTP_410_GONE,
    EmailDeliveryFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: AuthError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(exc: AuthError, locale: str) -> HTTPException:
    """Build the HTTPException a route raises for a domain error."""
    status_code = status_for(exc)
    headers = None
    if isinstance(exc, InvalidSession):
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=status_code,
        detail=translate(exc.message_key, locale),
        headers=headers,
    )


def _request_locale(request: Request) -> str:
    return negotiate_locale(
        request.headers.get("accept-language"), get_settings().default_locale
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are plain 400s."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": translate("invalid_request", _request_locale(request))},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with a non-revealing message."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": translate("unexpected_error", _request_locale(request))},
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
