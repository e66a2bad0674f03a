"""Tests for application settings."""

from flithub.core.config import AuthSettings, ImportSettings, Settings, get_settings


class TestAuthSettings:
    """Identity provider settings read AUTH_* variables."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("AUTH_ADMIN_ROLE", raising=False)
        settings = AuthSettings()
        assert settings.user_path == "/auth/v1/user"
        assert settings.admin_role == "admin"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("AUTH_BASE_URL", "https://identity.example.ie")
        monkeypatch.setenv("AUTH_TIMEOUT", "2.5")

        settings = AuthSettings()

        assert settings.base_url == "https://identity.example.ie"
        assert settings.timeout == 2.5


class TestImportSettings:
    """Import defaults read IMPORT_* variables."""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("IMPORT_DEFAULT_REVIEW_STATUS", "pending")
        assert ImportSettings().default_review_status == "pending"


class TestSettings:
    """Top-level settings."""

    def test_nested_settings(self):
        settings = Settings()
        assert isinstance(settings.auth, AuthSettings)
        assert isinstance(settings.imports, ImportSettings)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
