"""
In-memory repository adapters - process-local stores for development and tests.

Same guarantees as the PostgreSQL adapters: unique email on insert,
atomic check-and-delete on consume, and a verified flag that never reverts.
A single lock per store serializes mutations.
"""

import threading
from dataclasses import replace
from datetime import datetime

from src.domain.exceptions import PersistenceError
from src.domain.models import Credential, VerificationEntry


class InMemoryCredentialRepository:
    """Implements CredentialRepository protocol with a dict keyed by email."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_email: dict[str, Credential] = {}

    def find_by_email(self, email: str) -> Credential | None:
        with self._lock:
            credential = self._by_email.get(email)
            return replace(credential) if credential is not None else None

    def insert_unique(self, credential: Credential) -> bool:
        with self._lock:
            if credential.email in self._by_email:
                return False
            self._by_email[credential.email] = replace(credential)
            return True

    def save(self, credential: Credential) -> None:
        with self._lock:
            stored = self._by_email.get(credential.email)
            if stored is None or stored.id != credential.id:
                raise PersistenceError(f"Credential {credential.id} no longer exists")
            stored.password_hash = credential.password_hash
            stored.is_verified = stored.is_verified or credential.is_verified
            stored.updated_at = credential.updated_at


class InMemoryVerificationRepository:
    """Implements VerificationRepository protocol with a dict keyed by token."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_token: dict[str, VerificationEntry] = {}

    def insert(self, entry: VerificationEntry) -> None:
        with self._lock:
            if entry.token in self._by_token:
                raise PersistenceError("Verification token collision")
            self._by_token[entry.token] = entry

    def consume_atomic(self, token: str, email: str, now: datetime) -> VerificationEntry | None:
        with self._lock:
            entry = self._by_token.get(token)
            if entry is None or entry.email != email or entry.is_expired(now):
                return None
            del self._by_token[token]
            return entry

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [token for token, entry in self._by_token.items() if entry.is_expired(now)]
            for token in expired:
                del self._by_token[token]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_token)
