# core/config.py
"""
Central configuration – Marketing Analyzer

✔ Multi-environment (development / staging / production)
✔ Pydantic Settings v2
✔ Automatic per-environment adjustments
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ============================
    #   Pydantic settings
    # ============================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ============================
    #   ENVIRONMENT
    # ============================
    APP_NAME: str = "MarketingAnalyzer"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    APP_DEBUG: bool = True  # forced according to APP_ENV

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ============================
    #   DATABASE
    # ============================
    DATABASE_URL: str = "sqlite:///./marketingDB.db"

    # ============================
    #   SECURITY
    # ============================
    # Shared secret expected in X-API-Key. None disables gating.
    API_KEY: str | None = None

    # Comma-separated; "*" allows any origin
    CORS_ORIGINS: str = "*"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100
    # Honour X-Forwarded-For for the client ip (only behind a trusted proxy)
    TRUST_PROXY: bool = False

    # ============================
    #   BUSINESS RULES
    # ============================
    CURRENCY: str = "VND"

    # ============================
    #   LOGGING
    # ============================
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    # ============================
    #   POST INIT
    # ============================
    def model_post_init(self, __context) -> None:
        """
        Per-environment adjustments.
        """
        env = (self.APP_ENV or "development").lower()

        if env in ("production", "staging"):
            object.__setattr__(self, "APP_DEBUG", False)

        # An empty API_KEY in .env means "not configured"
        if self.API_KEY is not None and not self.API_KEY.strip():
            object.__setattr__(self, "API_KEY", None)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in (self.CORS_ORIGINS or "").split(",") if o.strip()]
        return origins or ["*"]


# ============================
#   DEFAULT INSTANCE
# ============================
settings = Settings()
