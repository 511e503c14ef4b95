"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from typing import Protocol

from .models import Credential, VerificationEntry


class CredentialRepository(Protocol):
    """Port interface for credential persistence."""

    def find_by_email(self, email: str) -> Credential | None:
        """
        Fetch the credential stored for an email.

        Args:
            email: Email exactly as stored

        Returns:
            Credential if present, None otherwise
        """
        ...

    def insert_unique(self, credential: Credential) -> bool:
        """
        Insert a new credential, relying on the store's unique email index.

        Concurrent inserts for the same email must leave exactly one row;
        losers get False rather than overwriting.

        Args:
            credential: Fully populated credential (id assigned by the domain)

        Returns:
            True if inserted, False if the email already exists

        Raises:
            PersistenceError: Store I/O failure
        """
        ...

    def save(self, credential: Credential) -> None:
        """
        Persist password hash and verified flag changes.

        The verified flag must never revert from True to False.

        Raises:
            PersistenceError: Store I/O failure
        """
        ...


class VerificationRepository(Protocol):
    """Port interface for verification ledger persistence."""

    def insert(self, entry: VerificationEntry) -> None:
        """
        Store a verification entry.

        Raises:
            PersistenceError: Store I/O failure or token collision
        """
        ...

    def consume_atomic(self, token: str, email: str, now: datetime) -> VerificationEntry | None:
        """
        Atomically find and delete the entry matching token AND email.

        Entries with expires_at <= now are treated as absent. Two concurrent
        calls for the same token must see exactly one success.

        Returns:
            The deleted entry, or None if nothing matched
        """
        ...

    def purge_expired(self, now: datetime) -> int:
        """
        Delete expired entries.

        Returns:
            Number of deleted entries
        """
        ...


class VerificationNotifier(Protocol):
    """Port interface for verification message delivery."""

    def notify_verification(self, email: str, display_name: str, token: str) -> None:
        """
        Deliver a verification token to the account holder.

        Args:
            email: Recipient email address
            display_name: Name used to address the recipient
            token: Raw verification token

        Raises:
            Exception: Any delivery failure; the domain reports it upward
        """
        ...
