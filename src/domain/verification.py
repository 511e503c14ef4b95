"""
Verification ledger - single-use, time-bounded email verification tokens.

Each token is 16 random bytes (128 bits) hex-encoded. Entries expire
24 hours after issuance; expired entries behave exactly like absent ones.

Issuing a new token does not invalidate older outstanding tokens for
the same email: each stays independently consumable until its own expiry.
"""

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from .exceptions import VerificationNotFound
from .models import VerificationEntry
from .ports import VerificationRepository
from .tokens import utc_now

logger = logging.getLogger(__name__)

VERIFICATION_TTL = timedelta(hours=24)
TOKEN_BYTES = 16


class VerificationLedger:
    """Issues and consumes verification entries through a VerificationRepository."""

    def __init__(
        self,
        repository: VerificationRepository,
        ttl: timedelta = VERIFICATION_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._ttl = ttl
        self._clock = clock

    def issue(self, email: str) -> str:
        """
        Mint and persist a verification token for email.

        Returns:
            The raw token

        Raises:
            PersistenceError: The store rejected the write
        """
        now = self._clock()
        token = secrets.token_hex(TOKEN_BYTES)
        self._repository.insert(
            VerificationEntry(token=token, email=email, created_at=now, expires_at=now + self._ttl)
        )
        logger.info("Verification token issued for %s", email)
        return token

    def consume(self, token: str, email: str) -> VerificationEntry:
        """
        Consume the entry matching both token and email.

        Raises:
            VerificationNotFound: No live entry matched
        """
        entry = self._repository.consume_atomic(token, email, self._clock())
        if entry is None:
            raise VerificationNotFound("Verification record not found or already used")
        return entry

    def purge_expired(self) -> int:
        """Delete entries past their expiry; returns how many were removed."""
        return self._repository.purge_expired(self._clock())
