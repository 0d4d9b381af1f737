"""
Notification delivery for the library lending system.

The ledgers only decide which messages go to whom. Delivery is behind the
``NotificationSender`` protocol so the reminder dispatcher can be given any
transport; ``SmtpNotificationSender`` is the one used in production.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol

from .config import LendingConfig, get_config
from .errors import NotificationError

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    """Delivers a text message to an address."""

    def send(self, address: str, subject: str, body: str) -> None:
        """
        Deliver one message.

        Raises:
            NotificationError: If the transport fails
        """
        ...


class SmtpNotificationSender:
    """Sends plain-text emails through an SMTP server."""

    def __init__(self, config: LendingConfig | None = None):
        self.config = config or get_config()

    def build_message(self, address: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.sender_address
        message["To"] = address
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send(self, address: str, subject: str, body: str) -> None:
        """
        Send one email.

        The connection is upgraded with STARTTLS when configured, and a
        login is attempted only when a username is set.

        Raises:
            NotificationError: If connecting, authenticating or sending fails
        """
        message = self.build_message(address, subject, body)
        config = self.config

        try:
            with smtplib.SMTP(
                config.smtp_host, config.smtp_port, timeout=config.smtp_timeout
            ) as smtp:
                if config.smtp_use_tls:
                    smtp.starttls()
                if config.smtp_username:
                    smtp.login(config.smtp_username, config.smtp_password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("Failed to send email to %s: %s", address, e)
            raise NotificationError(f"Failed to send email to {address}: {e!s}") from e

        logger.info("Sent email to %s: %s", address, subject)
