"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging confirmation codes for local development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development purposes - prints confirmation codes to the log.
    """

    def send_confirmation_code(self, email: str, code: str) -> bool:
        """
        Log confirmation code to console (simulates email delivery).

        The code is logged at INFO level to be visible in container logs.

        Args:
            email: Recipient email address (normalized by domain layer)
            code: 6-digit confirmation code

        Returns:
            Always True
        """
        logger.info("[CONFIRMATION] Email: %s Code: %s", email, code)
        return True
