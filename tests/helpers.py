"""
Test helpers shared across unit, integration and adversarial suites.
"""

from datetime import datetime, timedelta
from unittest.mock import Mock

# Test-only secrets
ACCESS_SECRET = "test-access-secret-that-is-at-least-32-characters"  # nosec B105
REFRESH_SECRET = "test-refresh-secret-that-is-at-least-32-characters"  # nosec B105

# bcrypt minimum cost keeps unit tests fast
FAST_BCRYPT_ROUNDS = 4


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def sent_token(notifier: Mock) -> str:
    """Token passed to the most recent notify_verification call."""
    return notifier.notify_verification.call_args[0][2]
