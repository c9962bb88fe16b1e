"""
Console mail sender adapter - Implements MailSender protocol.

This module provides a console-based implementation of the domain's
mail sender port, logging the verification email for development use.
"""

import logging

from src.domain.models import MailMessage

logger = logging.getLogger(__name__)


class ConsoleMailSender:
    """
    Implements MailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - never fails, never touches the network.
    """

    def send(self, message: MailMessage) -> None:
        """
        Log the verification email (simulates delivery).

        Logged at INFO level to be visible in docker-compose logs.
        The plain-text body contains the verification link.

        Args:
            message: Composed verification email
        """
        logger.info(
            "[VERIFICATION] To: %s Subject: %s\n%s",
            message.to,
            message.subject,
            message.text,
        )
