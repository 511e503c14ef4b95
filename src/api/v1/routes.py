"""
API v1 routes.

Defines REST endpoints for registration, login, verification and refresh.
Domain errors are translated by the handler in src.api.errors.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_account_service,
    get_current_account,
    get_refresh_identity,
)
from src.api.models import (
    AccountResponse,
    ChangePasswordRequest,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    TokensResponse,
    VerifyResponse,
)
from src.domain.accounts import AccountService
from src.domain.exceptions import AccountNotFound, InvalidCredentials
from src.domain.models import AccountView, TokenPayload

router = APIRouter(prefix="/auth", tags=["v1"])


@router.post(
    "/users/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
        502: {"model": ErrorResponse, "description": "Verification message not sent"},
    },
    summary="Register a new user",
    description="Create an unverified account. A verification token is sent to the email.",
)
async def register(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """
    Register a new user and send a verification token.

    - **email**: Valid email address to register
    - **password**: Password (minimum 8 characters)
    - **display_name**: Optional name for the verification message
    """
    account = service.register(request_data.email, request_data.password, request_data.display_name)
    return RegisterResponse(
        message=f"You have successfully created an account with {account.email}",
        user=AccountResponse.from_view(account),
    )


@router.post(
    "/users/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        403: {"model": ErrorResponse, "description": "Account not verified"},
    },
    summary="Log in with email and password",
)
async def login(
    request_data: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """Check credentials and return a fresh token pair."""
    try:
        result = service.login(request_data.email, request_data.password)
    except AccountNotFound:
        # Unknown email looks exactly like a wrong password
        raise InvalidCredentials() from None
    return LoginResponse(
        message=f"You have successfully logged in as {result.account.email}",
        user=AccountResponse.from_view(result.account),
        tokens=TokensResponse.from_pair(result.tokens),
    )


@router.post(
    "/account/verify",
    response_model=VerifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Account already verified"},
        404: {"model": ErrorResponse, "description": "Token not found, used or expired"},
    },
    summary="Verify account with emailed token",
)
async def verify_account(
    code: str = Query(..., min_length=1, description="Verification token from the email"),
    email: str = Query(..., min_length=1),
    service: AccountService = Depends(get_account_service),
) -> VerifyResponse:
    """Consume a verification token and mark the account verified."""
    result = service.verify(code, email)
    return VerifyResponse(
        message="Your account has successfully been verified",
        email=result.email,
        is_verified=result.is_verified,
    )


@router.post(
    "/account/resend",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"model": ErrorResponse, "description": "Account already verified"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
    summary="Send a new verification token",
)
async def resend_verification(
    request_data: ResendVerificationRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    service.resend_verification(request_data.email)
    return MessageResponse(message="Verification token sent")


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired refresh token"}},
    summary="Exchange a refresh token for a new token pair",
)
async def refresh(
    identity: TokenPayload = Depends(get_refresh_identity),
    service: AccountService = Depends(get_account_service),
) -> RefreshResponse:
    """Refresh token is read from the Authorization: Bearer header."""
    tokens = service.refresh(identity)
    return RefreshResponse(
        message="Session successfully refreshed",
        tokens=TokensResponse.from_pair(tokens),
    )


@router.get(
    "/me",
    response_model=AccountResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired access token"}},
    summary="Current account",
)
async def me(account: AccountView = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.from_view(account)


@router.post(
    "/users/password",
    response_model=AccountResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid token or current password"}},
    summary="Change password of the current account",
)
async def change_password(
    request_data: ChangePasswordRequest,
    account: AccountView = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    updated = service.change_password(
        account.email, request_data.current_password, request_data.new_password
    )
    return AccountResponse.from_view(updated)
