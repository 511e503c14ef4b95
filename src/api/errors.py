"""
Domain error to HTTP response mapping.

One exception handler covers every AccountError; each ErrorKind has
exactly one status code and one generic message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import AccountError, ErrorKind

logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, "Registration failed"),
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Not found"),
    ErrorKind.UNAUTHORIZED: (status.HTTP_401_UNAUTHORIZED, "Invalid email or password"),
    ErrorKind.ACCOUNT_NOT_VERIFIED: (
        status.HTTP_403_FORBIDDEN,
        "Please verify your account before logging in",
    ),
    ErrorKind.ALREADY_VERIFIED: (status.HTTP_400_BAD_REQUEST, "Account is already verified"),
    ErrorKind.TOKEN_INVALID: (status.HTTP_401_UNAUTHORIZED, "Invalid token"),
    ErrorKind.TOKEN_EXPIRED: (status.HTTP_401_UNAUTHORIZED, "Token has expired"),
    ErrorKind.TOKEN_MALFORMED: (status.HTTP_401_UNAUTHORIZED, "Malformed token"),
    ErrorKind.PERSISTENCE: (status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable"),
    ErrorKind.NOTIFICATION_FAILED: (
        status.HTTP_502_BAD_GATEWAY,
        "Verification message could not be sent",
    ),
}

_BEARER_KINDS = {ErrorKind.TOKEN_INVALID, ErrorKind.TOKEN_EXPIRED, ErrorKind.TOKEN_MALFORMED}


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Translate a domain error into its JSON error response."""
    status_code, detail = ERROR_RESPONSES[exc.kind]
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.kind.value)

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind in _BEARER_KINDS else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": exc.kind.value},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountError, account_error_handler)  # type: ignore[arg-type]
