"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging confirmation emails for development.
"""

import logging

from src.domain.ports import ConfirmationEmail

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Used when no SparkPost API key is configured.
    """

    def send(self, recipient: str, message: ConfirmationEmail) -> None:
        """
        Log the confirmation email (simulates email delivery).

        Logged at INFO level so it is visible in server logs.

        Args:
            recipient: Recipient email address (normalized by domain layer)
            message: Rendered confirmation email
        """
        logger.info("[CONFIRMATION] To: %s Subject: %s\n%s", recipient, message.subject, message.html)
