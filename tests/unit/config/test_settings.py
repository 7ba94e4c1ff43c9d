"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from fieldvault_config.settings import Settings, get_settings


class TestSettings:
    def test_database_url_uses_asyncpg(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("POSTGRES_HOST", "db")
        monkeypatch.setenv("POSTGRES_USER", "vault")
        monkeypatch.setenv("POSTGRES_PASSWORD", "s3cret")
        monkeypatch.setenv("POSTGRES_PORT", "6543")
        monkeypatch.setenv("POSTGRES_DB", "records")

        settings = Settings()

        assert settings.database_url == "postgresql+asyncpg://vault:s3cret@db:6543/records"

    def test_cors_origins_are_split(self):
        settings = Settings(api_cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_key_version_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENCRYPTION_KEY_VERSION", "3")

        assert Settings().encryption_key_version == 3

    def test_key_version_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(encryption_key_version=0)

    def test_identity_provider_is_validated(self):
        with pytest.raises(ValidationError):
            Settings(identity_provider="ldap")

    def test_secrets_are_masked(self):
        settings = Settings(jwt_secret_key="very-secret")

        assert "very-secret" not in repr(settings)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
