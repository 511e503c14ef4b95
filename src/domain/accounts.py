"""
Account domain service - credential and verification lifecycle.

This module orchestrates registration, login, verification and token
refresh on top of the credential store, the verification ledger and
the token signer.

Account State Machine (Forward-Only)
====================================

States:
- UNVERIFIED: Initial state after registration
- VERIFIED: Terminal state after a verification token is consumed

Valid Transitions:
    UNVERIFIED -> VERIFIED   (verify with a live token for the same email)

Invalid Transitions:
    VERIFIED -> any          (verifying again raises AccountAlreadyVerified)

Registration is a two-phase write: the credential insert, then the
ledger insert. If the ledger or notifier fails afterwards the account
stays UNVERIFIED and resend_verification() issues a fresh token.

Every operation reads the stores afresh; nothing is cached between calls.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .exceptions import (
    AccountAlreadyVerified,
    AccountNotFound,
    AccountNotVerified,
    EmailAlreadyRegistered,
    InvalidCredentials,
    NotificationFailed,
)
from .models import (
    AccountView,
    Credential,
    LoginResult,
    TokenPair,
    TokenPayload,
    VerificationResult,
)
from .passwords import DUMMY_PASSWORD_HASH, PasswordHasher
from .ports import CredentialRepository, VerificationNotifier
from .tokens import (
    LOGIN_WATERMARK_MINUTES,
    REFRESH_WATERMARK_MINUTES,
    TokenSigner,
    utc_now,
)
from .verification import VerificationLedger

logger = logging.getLogger(__name__)


@dataclass
class AccountService:
    """
    Domain service for the account lifecycle.

    With require_verified_login (the default) login is refused until
    the account has been verified.
    """

    credentials: CredentialRepository
    ledger: VerificationLedger
    signer: TokenSigner
    notifier: VerificationNotifier
    hasher: PasswordHasher = field(default_factory=PasswordHasher)
    require_verified_login: bool = True
    login_watermark_minutes: int = LOGIN_WATERMARK_MINUTES
    refresh_watermark_minutes: int = REFRESH_WATERMARK_MINUTES
    clock: Callable[[], datetime] = utc_now

    def register(self, email: str, password: str, display_name: str | None = None) -> AccountView:
        """
        Create an unverified account and send it a verification token.

        Args:
            email: Account email (surrounding whitespace is stripped)
            password: Plaintext password (will be hashed)
            display_name: Name for the verification notice, defaults to
                the email local part

        Returns:
            Sanitized view of the new account

        Raises:
            EmailAlreadyRegistered: Email already has an account
            PersistenceError: Credential or ledger write failed
            NotificationFailed: Notifier rejected the verification notice
        """
        normalized_email = self._normalize_email(email)
        now = self.clock()
        credential = Credential(
            id=str(uuid.uuid4()),
            email=normalized_email,
            password_hash=self.hasher.hash(password),
            is_verified=False,
            created_at=now,
            updated_at=now,
        )

        if not self.credentials.insert_unique(credential):
            raise EmailAlreadyRegistered(normalized_email)
        logger.info("Account %s registered", credential.id)

        self._send_verification(normalized_email, display_name)
        return AccountView.from_credential(credential)

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check a password and issue a token pair.

        Raises:
            AccountNotFound: No account for email
            InvalidCredentials: Password mismatch
            AccountNotVerified: Account unverified and verified login required
        """
        normalized_email = self._normalize_email(email)
        credential = self.credentials.find_by_email(normalized_email)

        if credential is None:
            # Keep response time independent of account existence
            self.hasher.verify(password, DUMMY_PASSWORD_HASH)
            raise AccountNotFound(normalized_email)

        if not self.hasher.verify(password, credential.password_hash):
            raise InvalidCredentials(normalized_email)

        if self.require_verified_login and not credential.is_verified:
            raise AccountNotVerified(normalized_email)

        tokens = self.signer.issue_pair(self._payload(credential), self.login_watermark_minutes)
        logger.info("Account %s logged in", credential.id)
        return LoginResult(account=AccountView.from_credential(credential), tokens=tokens)

    def verify(self, token: str, email: str) -> VerificationResult:
        """
        Consume a verification token and mark the account verified.

        Raises:
            VerificationNotFound: Token unknown, consumed, expired or for another email
            AccountNotFound: Token matched but no account exists
            AccountAlreadyVerified: Account was already verified
        """
        normalized_email = self._normalize_email(email)
        self.ledger.consume(token, normalized_email)

        credential = self.credentials.find_by_email(normalized_email)
        if credential is None:
            raise AccountNotFound(normalized_email)
        if credential.is_verified:
            raise AccountAlreadyVerified(normalized_email)

        credential.is_verified = True
        credential.updated_at = self.clock()
        self.credentials.save(credential)
        logger.info("Account %s verified", credential.id)
        return VerificationResult(email=credential.email, is_verified=True)

    def refresh(self, identity: TokenPayload) -> TokenPair:
        """
        Re-issue a token pair for an identity already validated by identify_refresh().

        Password and verification status are not re-checked.
        """
        return self.signer.issue_pair(identity, self.refresh_watermark_minutes)

    def identify_refresh(self, refresh_token: str) -> TokenPayload:
        """
        Validate a refresh token.

        Raises:
            TokenInvalid, TokenExpired, TokenMalformed
        """
        return self.signer.verify_refresh(refresh_token)

    def authenticate(self, access_token: str) -> AccountView:
        """
        Resolve an access token to the current state of its account.

        Raises:
            TokenInvalid, TokenExpired, TokenMalformed
            AccountNotFound: Token is valid but the account is gone
        """
        payload = self.signer.verify_access(access_token)
        credential = self.credentials.find_by_email(payload.email)
        if credential is None:
            raise AccountNotFound(payload.email)
        return AccountView.from_credential(credential)

    def resend_verification(self, email: str, display_name: str | None = None) -> None:
        """
        Issue and send another verification token.

        Earlier tokens remain valid until their own expiry.

        Raises:
            AccountNotFound: No account for email
            AccountAlreadyVerified: Nothing left to verify
        """
        normalized_email = self._normalize_email(email)
        credential = self.credentials.find_by_email(normalized_email)
        if credential is None:
            raise AccountNotFound(normalized_email)
        if credential.is_verified:
            raise AccountAlreadyVerified(normalized_email)
        self._send_verification(normalized_email, display_name)

    def change_password(self, email: str, current_password: str, new_password: str) -> AccountView:
        """
        Regenerate the password hash after checking the current password.

        Raises:
            AccountNotFound: No account for email
            InvalidCredentials: current_password does not match
        """
        normalized_email = self._normalize_email(email)
        credential = self.credentials.find_by_email(normalized_email)
        if credential is None:
            raise AccountNotFound(normalized_email)
        if not self.hasher.verify(current_password, credential.password_hash):
            raise InvalidCredentials(normalized_email)

        credential.password_hash = self.hasher.hash(new_password)
        credential.updated_at = self.clock()
        self.credentials.save(credential)
        logger.info("Account %s changed password", credential.id)
        return AccountView.from_credential(credential)

    def _send_verification(self, email: str, display_name: str | None) -> None:
        token = self.ledger.issue(email)
        name = display_name or email.split("@", 1)[0]
        try:
            self.notifier.notify_verification(email, name, token)
        except Exception as exc:
            logger.error("Verification notice for %s failed: %s", email, exc)
            raise NotificationFailed(email) from exc

    def _payload(self, credential: Credential) -> TokenPayload:
        return TokenPayload(account_id=credential.id, email=credential.email)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for storage and lookup.

        Strips whitespace only; emails are case-sensitive as stored.
        """
        return email.strip()
