"""Tests for application settings."""

import pytest
from city_info_api.config import Settings
from pydantic import ValidationError


class TestCorsOrigins:
    def test_parses_json_list(self):
        settings = Settings(cors_origins='["http://a.test", "http://b.test"]')
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_parses_comma_separated(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins == ["http://a.test", "http://b.test"]


class TestMailBackend:
    def test_normalizes_case(self):
        assert Settings(mail_backend=" SMTP ").mail_backend == "smtp"

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValidationError):
            Settings(mail_backend="carrier-pigeon")
