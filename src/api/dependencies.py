"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import (
    PostgresCredentialRepository,
    PostgresVerificationRepository,
)
from src.adapters.smtp.console import ConsoleVerificationNotifier
from src.config.settings import Settings, get_settings
from src.domain.accounts import AccountService
from src.domain.exceptions import AccountNotFound, TokenInvalid, TokenMalformed
from src.domain.models import AccountView, TokenPayload
from src.domain.passwords import PasswordHasher
from src.domain.tokens import TokenSigner
from src.domain.verification import VerificationLedger

# Module-level singleton - ConsoleVerificationNotifier is stateless
_notifier = ConsoleVerificationNotifier()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_notifier() -> ConsoleVerificationNotifier:
    """Get console notifier (singleton)."""
    return _notifier


def get_token_signer(settings: Settings = Depends(get_settings)) -> TokenSigner:
    """Build the token signer from configured secrets and TTLs."""
    return TokenSigner(
        access_secret=settings.secret_key,
        refresh_secret=settings.refresh_key,
        access_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
        refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
    )


def get_account_service(
    request: Request,
    settings: Settings = Depends(get_settings),
    signer: TokenSigner = Depends(get_token_signer),
) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires the PostgreSQL repositories, the notifier and the signer together.
    """
    pool = get_pool(request)
    ledger = VerificationLedger(
        repository=PostgresVerificationRepository(pool),
        ttl=timedelta(hours=settings.verification_ttl_hours),
    )
    return AccountService(
        credentials=PostgresCredentialRepository(pool),
        ledger=ledger,
        signer=signer,
        notifier=get_notifier(),
        hasher=PasswordHasher(rounds=settings.bcrypt_cost),
        require_verified_login=settings.require_verified_login,
        login_watermark_minutes=settings.login_watermark_minutes,
        refresh_watermark_minutes=settings.refresh_watermark_minutes,
    )


# Bearer security scheme for OpenAPI documentation
http_bearer = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str:
    """
    Extract the raw token from an "Authorization: Bearer <token>" header.

    Missing or non-Bearer headers are rejected as malformed tokens (401).
    """
    if credentials is None or not credentials.credentials:
        raise TokenMalformed("Missing bearer token")
    return credentials.credentials


def get_refresh_identity(
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> TokenPayload:
    """Validate the bearer refresh token; token errors surface as 401."""
    return service.identify_refresh(token)


def get_current_account(
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> AccountView:
    """
    Resolve the bearer access token to the current account.

    A valid token whose account no longer exists is an invalid token (401).
    """
    try:
        return service.authenticate(token)
    except AccountNotFound:
        raise TokenInvalid("Token account does not exist") from None
