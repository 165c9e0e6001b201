"""Notification senders.

The local sender only logs, which is what development and tests use. The
SMTP sender delivers a plain text email through the configured relay.
"""

import logging
import smtplib
from email.mime.text import MIMEText

from city_info_api.config import Settings

logger = logging.getLogger(__name__)


class MailService:
    """Interface for sending a notification message."""

    def __init__(self, mail_to: str, mail_from: str):
        self.mail_to = mail_to
        self.mail_from = mail_from

    def send(self, subject: str, message: str) -> None:
        raise NotImplementedError


class LocalMailService(MailService):
    """Writes mails to the log instead of sending them."""

    def send(self, subject: str, message: str) -> None:
        logger.info(
            f"Mail from {self.mail_from} to {self.mail_to}, with LocalMailService. "
            f"Subject: {subject} Message: {message}"
        )


class SmtpMailService(MailService):
    """Sends mails through an SMTP relay."""

    def __init__(self, mail_to: str, mail_from: str, host: str, port: int):
        super().__init__(mail_to, mail_from)
        self.host = host
        self.port = port

    def send(self, subject: str, message: str) -> None:
        msg = MIMEText(message, "plain")
        msg["Subject"] = subject
        msg["From"] = self.mail_from
        msg["To"] = self.mail_to

        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            server.send_message(msg)
        logger.info(f"Mail sent to {self.mail_to}: {subject}")


def create_mail_service(settings: Settings) -> MailService:
    """Build the sender selected by ``settings.mail_backend``."""
    if settings.mail_backend == "smtp":
        return SmtpMailService(
            settings.mail_to_address,
            settings.mail_from_address,
            settings.smtp_host,
            settings.smtp_port,
        )
    return LocalMailService(settings.mail_to_address, settings.mail_from_address)


def send_quietly(mail_service: MailService, subject: str, message: str) -> None:
    """Send a notification, logging failures instead of raising them.

    Used for fire-and-forget notifications that run after the response.
    """
    try:
        mail_service.send(subject, message)
    except Exception as e:
        logger.error(f"Failed to send notification '{subject}': {e}")
