"""Tests for environment-based settings."""

from src.utils.config import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("MAX_INTERNAL_PAGES", raising=False)
        settings = Settings(_env_file=None)
        assert settings.PORT == 3001
        assert settings.MAX_INTERNAL_PAGES == 5

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("page_timeout", "2.5")
        settings = Settings(_env_file=None)
        assert settings.PORT == 8080
        assert settings.PAGE_TIMEOUT == 2.5

    def test_allowed_origins_split(self):
        settings = Settings(_env_file=None, ALLOWED_ORIGINS="https://a.com, https://b.com,")
        assert settings.allowed_origins == ["https://a.com", "https://b.com"]

    def test_cached(self):
        assert get_settings() is get_settings()
