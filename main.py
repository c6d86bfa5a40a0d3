# main.py
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, settings as default_settings
from core.context import AppContext
from core.logging_config import logger, setup_logging
from core.security import api_key_enabled

# Middleware
from core.middleware.api_key import api_key_middleware
from core.middleware.rate_limit import rate_limit_middleware
from core.middleware.request_context import request_context_middleware
from core.middleware.security_headers import security_headers_middleware

# Routers
from core.routes import routes_health
from modules.marketing_analyzer.routes.routes_analysis import router as analysis_router


# ============================
#   APP FACTORY
# ============================

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = AppContext.open(settings)
        app.state.ctx = ctx

        if not api_key_enabled(settings):
            logger.warning("API_KEY not configured: /analyze and /history are not gated")

        logger.info("%s started (env=%s)", settings.APP_NAME, settings.APP_ENV)
        try:
            yield
        finally:
            ctx.close()
            logger.info("%s stopped", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
    )

    # ============================
    #   MIDDLEWARE
    # ============================
    # Last registered runs first: CORS -> request context -> security
    # headers -> rate limit -> API key -> route
    app.middleware("http")(api_key_middleware)
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(request_context_middleware)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================
    #   ERRORS
    # ============================

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error in %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "details": str(exc)},
        )

    # ============================
    #   ROUTERS
    # ============================
    app.include_router(routes_health.router)
    app.include_router(analysis_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.APP_DEBUG,
    )
