"""
Token signing - HS256 JWT access and refresh tokens.

Access and refresh tokens are signed with two independent secrets so that
holding one secret (or one class of token) never allows forging the other.

Claims:
- sub: account email
- user_id: account id
- role: optional extension claim, omitted when unset
- iat / exp: issued-at and expiry (seconds since epoch)

The TokenPair.expires_at watermark is a separate epoch-millisecond value,
computed from watermark_minutes rather than from either token's exp.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from .exceptions import TokenExpired, TokenInvalid, TokenMalformed
from .models import TokenPair, TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

ACCESS_TOKEN_TTL = timedelta(hours=1)
REFRESH_TOKEN_TTL = timedelta(hours=12)

# Watermark offsets in minutes
LOGIN_WATERMARK_MINUTES = 1
REFRESH_WATERMARK_MINUTES = 5


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenSigner:
    """Stateless signer for access / refresh token pairs."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Both access and refresh secrets are required")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._clock = clock

    def sign(self, payload: TokenPayload, secret: str, ttl: timedelta) -> str:
        """Produce a signed, self-expiring token for payload."""
        now = self._clock()
        claims: dict[str, Any] = {
            "sub": payload.email,
            "user_id": payload.account_id,
            "iat": now,
            "exp": now + ttl,
        }
        if payload.role is not None:
            claims["role"] = payload.role
        return jwt.encode(claims, secret, algorithm=ALGORITHM)

    def verify(self, token: str, secret: str) -> TokenPayload:
        """
        Validate a token against secret and return its payload.

        Raises:
            TokenInvalid: Signature does not match secret
            TokenExpired: Past the embedded exp claim
            TokenMalformed: Not decodable, or required claims missing
        """
        try:
            # exp is checked below against the signer's own clock
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={
                    "require": ["exp", "iat", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as exc:
            raise TokenInvalid("Token signature mismatch") from exc
        except (jwt.DecodeError, jwt.MissingRequiredClaimError) as exc:
            raise TokenMalformed("Token could not be decoded") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalid(str(exc)) from exc

        expires = claims["exp"]
        if isinstance(expires, bool) or not isinstance(expires, int | float):
            raise TokenMalformed("Token exp claim must be a number")
        if expires <= self._clock().timestamp():
            raise TokenExpired("Token has expired")

        account_id = claims.get("user_id")
        email = claims.get("sub")
        role = claims.get("role")
        if not isinstance(account_id, str) or not isinstance(email, str):
            raise TokenMalformed("Token is missing identity claims")
        if role is not None and not isinstance(role, str):
            raise TokenMalformed("Token role claim must be a string")
        return TokenPayload(account_id=account_id, email=email, role=role)

    def verify_access(self, token: str) -> TokenPayload:
        return self.verify(token, self._access_secret)

    def verify_refresh(self, token: str) -> TokenPayload:
        return self.verify(token, self._refresh_secret)

    def issue_pair(self, payload: TokenPayload, watermark_minutes: int) -> TokenPair:
        """
        Sign an access token (1h) and a refresh token (12h) for payload.

        Args:
            payload: Identity to embed
            watermark_minutes: Offset for the client-facing expires_at hint

        Returns:
            TokenPair with expires_at in epoch milliseconds
        """
        access_token = self.sign(payload, self._access_secret, self._access_ttl)
        refresh_token = self.sign(payload, self._refresh_secret, self._refresh_ttl)
        logger.debug("Issued token pair for account %s", payload.account_id)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=self.watermark(watermark_minutes),
        )

    def watermark(self, minutes: int) -> int:
        """Epoch milliseconds, `minutes` from now."""
        return int(self._clock().timestamp() * 1000) + minutes * 60_000
