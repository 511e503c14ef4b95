"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, validate_email

from src.domain.models import AccountView, TokenPair


def _check_email_format(value: str) -> str:
    """
    Reject malformed addresses but keep the caller's exact string.

    Emails are case-sensitive as stored, so login and verification must
    match what was registered without any rewriting.
    """
    _, normalized = validate_email(value)
    # Rejects "Name <addr>" forms, which validate_email also accepts
    if normalized.lower() != value.strip().lower():
        raise ValueError("value is not a plain email address")
    return value


EmailAddress = Annotated[
    str,
    AfterValidator(_check_email_format),
    Field(json_schema_extra={"format": "email"}),
]


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    email: EmailAddress
    password: str = Field(..., min_length=8, description="User password (min 8 characters)")
    display_name: str | None = Field(
        default=None, max_length=100, description="Name used in the verification message"
    )


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ResendVerificationRequest(BaseModel):
    """Request model for re-sending a verification token."""

    email: EmailAddress


class ChangePasswordRequest(BaseModel):
    """Request model for changing the password of the current account."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, description="New password (min 8 characters)")


class AccountResponse(BaseModel):
    """Sanitized account - never includes the password hash."""

    id: str
    email: str
    is_verified: bool

    @classmethod
    def from_view(cls, account: AccountView) -> "AccountResponse":
        return cls(id=account.id, email=account.email, is_verified=account.is_verified)


class TokensResponse(BaseModel):
    """Access/refresh token pair with the client-facing refresh-by hint."""

    access_token: str
    refresh_token: str
    expires_at: int = Field(..., description="Epoch milliseconds; refresh before this time")

    @classmethod
    def from_pair(cls, tokens: TokenPair) -> "TokensResponse":
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_at=tokens.expires_at,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    user: AccountResponse


class LoginResponse(BaseModel):
    """Response model for successful login."""

    message: str
    user: AccountResponse
    tokens: TokensResponse


class VerifyResponse(BaseModel):
    """Response model for successful account verification."""

    message: str
    email: str
    is_verified: bool


class RefreshResponse(BaseModel):
    """Response model for token refresh."""

    message: str
    tokens: TokensResponse


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
    code: str | None = None
