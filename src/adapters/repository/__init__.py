"""Repository adapters - Database and in-memory implementations."""

from .memory import InMemoryCredentialRepository, InMemoryVerificationRepository
from .postgres import PostgresCredentialRepository, PostgresVerificationRepository, run_migrations

__all__ = [
    "InMemoryCredentialRepository",
    "InMemoryVerificationRepository",
    "PostgresCredentialRepository",
    "PostgresVerificationRepository",
    "run_migrations",
]
