"""
Domain layer - Pure business logic with zero framework imports.

This package contains the credential and account-verification lifecycle.
It defines its own port interfaces for infrastructure abstraction, so
storage, delivery and transport stay outside the domain.
"""

from .accounts import AccountService
from .exceptions import (
    AccountAlreadyVerified,
    AccountError,
    AccountNotFound,
    AccountNotVerified,
    EmailAlreadyRegistered,
    ErrorKind,
    InvalidCredentials,
    NotFound,
    NotificationFailed,
    PersistenceError,
    TokenError,
    TokenExpired,
    TokenInvalid,
    TokenMalformed,
    VerificationNotFound,
)
from .models import (
    AccountView,
    Credential,
    LoginResult,
    TokenPair,
    TokenPayload,
    VerificationEntry,
    VerificationResult,
)
from .passwords import PasswordHasher
from .ports import (
    CredentialRepository,
    VerificationNotifier,
    VerificationRepository,
)
from .tokens import TokenSigner
from .verification import VerificationLedger

__all__ = [
    "AccountAlreadyVerified",
    "AccountError",
    "AccountNotFound",
    "AccountNotVerified",
    "AccountService",
    "AccountView",
    "Credential",
    "CredentialRepository",
    "EmailAlreadyRegistered",
    "ErrorKind",
    "InvalidCredentials",
    "LoginResult",
    "NotFound",
    "NotificationFailed",
    "PasswordHasher",
    "PersistenceError",
    "TokenError",
    "TokenExpired",
    "TokenInvalid",
    "TokenMalformed",
    "TokenPair",
    "TokenPayload",
    "TokenSigner",
    "VerificationEntry",
    "VerificationLedger",
    "VerificationNotFound",
    "VerificationNotifier",
    "VerificationRepository",
    "VerificationResult",
]
