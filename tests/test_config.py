"""
Tests for environment-driven settings.
"""
from core.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "DATABASE_URL", "API_KEY", "CURRENCY", "APP_ENV"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.PORT == 3000
        assert settings.DATABASE_URL == "sqlite:///./marketingDB.db"
        assert settings.API_KEY is None
        assert settings.CURRENCY == "VND"
        assert settings.RATE_LIMIT_WINDOW_SECONDS == 900
        assert settings.RATE_LIMIT_MAX_REQUESTS == 100

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("API_KEY", "k")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")

        settings = Settings(_env_file=None)

        assert settings.PORT == 8080
        assert settings.API_KEY == "k"
        assert settings.DATABASE_URL == "sqlite:///:memory:"

    def test_production_forces_debug_off(self):
        settings = Settings(_env_file=None, APP_ENV="production", APP_DEBUG=True)
        assert settings.APP_DEBUG is False

    def test_cors_origins_split(self):
        settings = Settings(_env_file=None, CORS_ORIGINS="http://a.com, http://b.com ,")
        assert settings.cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_default_any(self):
        assert Settings(_env_file=None, CORS_ORIGINS="").cors_origins == ["*"]
