"""
PostgreSQL repository adapters - Implement the credential and verification ports.

This module provides the PostgreSQL implementations of the domain's
repository ports using psycopg3 with raw SQL.

Concurrency Design:
-------------------
1. **Unique email**: credentials.email carries a UNIQUE constraint and
   inserts use ON CONFLICT (email) DO NOTHING, so of two concurrent
   registrations exactly one row is written and the loser sees rowcount 0.

2. **Atomic consume**: verification entries are consumed with a single
   DELETE ... RETURNING filtered on token, email and expiry. Row locking
   inside DELETE guarantees one winner per token.

3. **One-way verified flag**: save() writes is_verified = is_verified OR %s,
   so a stale in-memory credential can never un-verify an account.

Any psycopg error is re-raised as the domain's PersistenceError.
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import PersistenceError
from src.domain.models import Credential, VerificationEntry

logger = logging.getLogger(__name__)


class PostgresCredentialRepository:
    """
    Implements CredentialRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Credential | None:
        sql = """
            SELECT id, email, password_hash, is_verified, created_at, updated_at
            FROM credentials
            WHERE email = %s
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError("Credential lookup failed") from exc

        if row is None:
            return None
        return Credential(
            id=str(row[0]),
            email=row[1],
            password_hash=row[2],
            is_verified=row[3],
            created_at=row[4],
            updated_at=row[5],
        )

    def insert_unique(self, credential: Credential) -> bool:
        """
        Insert a credential unless the email is already taken.

        Returns:
            True if inserted, False if the email already exists
        """
        sql = """
            INSERT INTO credentials (id, email, password_hash, is_verified, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
        """
        params = (
            uuid.UUID(credential.id),
            credential.email,
            credential.password_hash,
            credential.is_verified,
            credential.created_at,
            credential.updated_at,
        )
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                conn.commit()
                return cursor.rowcount == 1
        except psycopg.Error as exc:
            raise PersistenceError("Credential insert failed") from exc

    def save(self, credential: Credential) -> None:
        sql = """
            UPDATE credentials
            SET password_hash = %s,
                is_verified = is_verified OR %s,
                updated_at = %s
            WHERE id = %s
        """
        params = (
            credential.password_hash,
            credential.is_verified,
            credential.updated_at,
            uuid.UUID(credential.id),
        )
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                conn.commit()
                updated = cursor.rowcount
        except psycopg.Error as exc:
            raise PersistenceError("Credential update failed") from exc

        if updated != 1:
            raise PersistenceError(f"Credential {credential.id} no longer exists")


class PostgresVerificationRepository:
    """Implements VerificationRepository protocol via psycopg3."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def insert(self, entry: VerificationEntry) -> None:
        sql = """
            INSERT INTO verification_entries (token, email, created_at, expires_at)
            VALUES (%s, %s, %s, %s)
        """
        try:
            with self._pool.connection() as conn:
                conn.execute(sql, (entry.token, entry.email, entry.created_at, entry.expires_at))
                conn.commit()
        except psycopg.errors.UniqueViolation as exc:
            raise PersistenceError("Verification token collision") from exc
        except psycopg.Error as exc:
            raise PersistenceError("Verification entry insert failed") from exc

    def consume_atomic(self, token: str, email: str, now: datetime) -> VerificationEntry | None:
        """
        Delete and return the live entry matching token and email.

        Expired rows are left for purge_expired() and never returned.
        """
        sql = """
            DELETE FROM verification_entries
            WHERE token = %s AND email = %s AND expires_at > %s
            RETURNING token, email, created_at, expires_at
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (token, email, now))
                row = cursor.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError("Verification entry consume failed") from exc

        if row is None:
            return None
        return VerificationEntry(token=row[0], email=row[1], created_at=row[2], expires_at=row[3])

    def purge_expired(self, now: datetime) -> int:
        sql = "DELETE FROM verification_entries WHERE expires_at <= %s"
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (now,))
                conn.commit()
                deleted = cursor.rowcount
        except psycopg.Error as exc:
            raise PersistenceError("Verification purge failed") from exc

        if deleted:
            logger.info("Purged %d expired verification entries", deleted)
        return deleted


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
        except psycopg.Error as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e

        logger.info("Migration complete: %s", sql_file.name)
