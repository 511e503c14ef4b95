"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock
- In-memory repositories
- A fully wired AccountService with a mocked notifier
"""

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import (
    InMemoryCredentialRepository,
    InMemoryVerificationRepository,
)
from src.domain.accounts import AccountService
from src.domain.passwords import PasswordHasher
from src.domain.tokens import TokenSigner
from src.domain.verification import VerificationLedger
from tests.helpers import ACCESS_SECRET, FAST_BCRYPT_ROUNDS, REFRESH_SECRET, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime.now(UTC).replace(microsecond=0))


@pytest.fixture
def credentials() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository()


@pytest.fixture
def verifications() -> InMemoryVerificationRepository:
    return InMemoryVerificationRepository()


@pytest.fixture
def signer() -> TokenSigner:
    return TokenSigner(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)


@pytest.fixture
def notifier() -> Mock:
    return Mock()


@pytest.fixture
def service(
    credentials: InMemoryCredentialRepository,
    verifications: InMemoryVerificationRepository,
    signer: TokenSigner,
    notifier: Mock,
    clock: FakeClock,
) -> AccountService:
    """AccountService over in-memory stores; notifier records sent tokens."""
    return AccountService(
        credentials=credentials,
        ledger=VerificationLedger(repository=verifications, clock=clock),
        signer=signer,
        notifier=notifier,
        hasher=PasswordHasher(rounds=FAST_BCRYPT_ROUNDS),
        clock=clock,
    )
