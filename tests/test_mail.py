"""Tests for notification senders."""

import logging
from unittest.mock import MagicMock, patch

from city_info_api.config import Settings
from city_info_api.mail import (
    LocalMailService,
    SmtpMailService,
    create_mail_service,
    send_quietly,
)


class TestCreateMailService:
    def test_local_by_default(self):
        service = create_mail_service(Settings(mail_backend="local"))
        assert isinstance(service, LocalMailService)

    def test_smtp(self):
        service = create_mail_service(
            Settings(mail_backend="smtp", smtp_host="mail.example.com", smtp_port=2525)
        )
        assert isinstance(service, SmtpMailService)
        assert service.host == "mail.example.com"
        assert service.port == 2525


class TestLocalMailService:
    def test_send_logs_the_message(self, caplog):
        service = LocalMailService("admin@example.com", "noreply@example.com")
        with caplog.at_level(logging.INFO, logger="city_info_api.mail"):
            service.send("Point of interest deleted.", "Gone.")
        assert "Point of interest deleted." in caplog.text
        assert "admin@example.com" in caplog.text


class TestSmtpMailService:
    def test_send_delivers_message(self):
        service = SmtpMailService("admin@example.com", "noreply@example.com", "localhost", 25)
        with patch("city_info_api.mail.smtplib.SMTP") as smtp_cls:
            server = MagicMock()
            smtp_cls.return_value.__enter__.return_value = server
            service.send("Subject", "Body")

        smtp_cls.assert_called_once_with("localhost", 25, timeout=10)
        sent = server.send_message.call_args.args[0]
        assert sent["Subject"] == "Subject"
        assert sent["To"] == "admin@example.com"
        assert sent["From"] == "noreply@example.com"


class TestSendQuietly:
    def test_failures_are_logged_not_raised(self, caplog):
        service = MagicMock()
        service.send.side_effect = ConnectionError("unreachable")

        with caplog.at_level(logging.ERROR, logger="city_info_api.mail"):
            send_quietly(service, "Subject", "Body")

        assert "Failed to send notification" in caplog.text
