"""
Domain exceptions - Semantic error types for the account lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Every exception carries an ErrorKind so the boundary layer can map
failures to transport status codes with one exhaustive switch.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the account core."""

    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    ACCOUNT_NOT_VERIFIED = "account_not_verified"
    ALREADY_VERIFIED = "already_verified"
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_MALFORMED = "token_malformed"
    PERSISTENCE = "persistence"
    NOTIFICATION_FAILED = "notification_failed"


class AccountError(Exception):
    """Base class for account domain errors."""

    kind: ErrorKind


class EmailAlreadyRegistered(AccountError):
    """An account already exists for this email."""

    kind = ErrorKind.CONFLICT


class NotFound(AccountError):
    """Requested record does not exist (or is no longer usable)."""

    kind = ErrorKind.NOT_FOUND


class AccountNotFound(NotFound):
    """No credential is stored for this email."""


class VerificationNotFound(NotFound):
    """Verification token unknown, already consumed, expired, or for another email."""


class InvalidCredentials(AccountError):
    """Password does not match the stored hash."""

    kind = ErrorKind.UNAUTHORIZED


class AccountNotVerified(AccountError):
    """Login attempted before the account was verified."""

    kind = ErrorKind.ACCOUNT_NOT_VERIFIED


class AccountAlreadyVerified(AccountError):
    """Account is already verified; verification cannot run twice."""

    kind = ErrorKind.ALREADY_VERIFIED


class TokenError(AccountError):
    """Base class for signed-token validation failures."""


class TokenInvalid(TokenError):
    """Signature does not match the expected secret."""

    kind = ErrorKind.TOKEN_INVALID


class TokenExpired(TokenError):
    """Token is past its embedded expiry."""

    kind = ErrorKind.TOKEN_EXPIRED


class TokenMalformed(TokenError):
    """Token cannot be decoded or lacks required claims."""

    kind = ErrorKind.TOKEN_MALFORMED


class PersistenceError(AccountError):
    """Store I/O failure."""

    kind = ErrorKind.PERSISTENCE


class NotificationFailed(AccountError):
    """Verification notice could not be handed to the notifier."""

    kind = ErrorKind.NOTIFICATION_FAILED
