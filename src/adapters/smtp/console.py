"""
Console code notifier adapter - Implements CodeNotifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging verification codes instead of emailing them.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleCodeNotifier:
    """
    Implements CodeNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stands in for email delivery, which is out of scope.
    """

    def send_verification_code(self, email: str, code: str) -> None:
        """
        Log verification code to console (simulates email delivery).

        Args:
            email: Recipient email address (normalized by domain layer)
            code: 6-digit verification code
        """
        logger.info("[VERIFICATION] Email: %s Code: %s", email, code)
