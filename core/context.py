# core/context.py
"""
Application context – Marketing Analyzer

✔ Built once in the FastAPI lifespan
✔ Owns the engine, session factory and rate limiter
✔ Released on shutdown (engine.dispose)
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config import Settings
from core.database import build_engine, build_session_factory, init_db
from core.logging_config import logger
from core.services.services_rate_limit import FixedWindowRateLimiter


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    rate_limiter: FixedWindowRateLimiter | None = None

    @classmethod
    def open(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings.DATABASE_URL)
        init_db(engine)

        rate_limiter = None
        if settings.RATE_LIMIT_ENABLED:
            rate_limiter = FixedWindowRateLimiter(
                max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
                window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
            )

        logger.info(
            "[CONTEXT] opened db=%s rate_limit=%s",
            engine.url.render_as_string(hide_password=True),
            "on" if rate_limiter else "off",
        )

        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            rate_limiter=rate_limiter,
        )

    def close(self) -> None:
        self.engine.dispose()
        logger.info("[CONTEXT] closed")
