"""
Domain records - plain dataclasses shared by the domain and its adapters.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Credential:
    """
    One account per unique email.

    is_verified starts False and flips to True exactly once.
    password_hash never leaves the domain; use AccountView outward.
    """

    id: str
    email: str
    password_hash: str
    is_verified: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AccountView:
    """Sanitized projection of a Credential (no password hash)."""

    id: str
    email: str
    is_verified: bool

    @classmethod
    def from_credential(cls, credential: Credential) -> "AccountView":
        return cls(
            id=credential.id,
            email=credential.email,
            is_verified=credential.is_verified,
        )


@dataclass(frozen=True)
class VerificationEntry:
    """Single-use, time-bounded token proving control of an email address."""

    token: str
    email: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class TokenPayload:
    """Claims embedded in access and refresh tokens."""

    account_id: str
    email: str
    role: str | None = None


@dataclass(frozen=True)
class TokenPair:
    """
    Access + refresh tokens.

    expires_at is an epoch-millisecond refresh-by hint for clients.
    It is computed separately from the tokens' own exp claims.
    """

    access_token: str
    refresh_token: str
    expires_at: int


@dataclass(frozen=True)
class LoginResult:
    account: AccountView
    tokens: TokenPair


@dataclass(frozen=True)
class VerificationResult:
    email: str
    is_verified: bool
