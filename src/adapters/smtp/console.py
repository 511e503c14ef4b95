"""
Console notifier adapter - Implements VerificationNotifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging verification tokens for development use.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleVerificationNotifier:
    """
    Implements VerificationNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stands in for real mail delivery; the token is logged at INFO level.
    """

    def notify_verification(self, email: str, display_name: str, token: str) -> None:
        """
        Log verification token to console (simulates email delivery).

        Args:
            email: Recipient email address
            display_name: Name the message would be addressed to
            token: Raw verification token
        """
        logger.info("[VERIFICATION] Email: %s Name: %s Token: %s", email, display_name, token)
