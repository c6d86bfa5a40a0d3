# core/middleware/api_key.py
"""
API key gating middleware – Marketing Analyzer

✔ Public routes (exact + prefixes)
✔ Rejects before any validation / computation / persistence
✔ Uniform 403 JSON body
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from core.logging_config import logger
from core.security import API_KEY_HEADER, AuthError, verify_api_key


# ============================
# PUBLIC ROUTES (NO AUTH)
# ============================

PUBLIC_EXACT_PATHS: set[str] = {
    "/",
    "/health",
    "/favicon.ico",
}

PUBLIC_PREFIXES: tuple[str, ...] = (
    "/docs",
    "/redoc",
    "/openapi.json",
)


def _is_public(path: str) -> bool:
    if path in PUBLIC_EXACT_PATHS:
        return True
    return any(path.startswith(prefix) for prefix in PUBLIC_PREFIXES)


# ============================
# MIDDLEWARE
# ============================

async def api_key_middleware(request: Request, call_next) -> Response:
    path = request.url.path

    # CORS preflight and public routes pass straight through
    if request.method == "OPTIONS" or _is_public(path):
        return await call_next(request)

    settings = request.app.state.ctx.settings

    try:
        verify_api_key(settings, request.headers.get(API_KEY_HEADER))
    except AuthError as exc:
        logger.warning(
            "[AUTH] rejected method=%s path=%s request_id=%s",
            request.method,
            path,
            getattr(request.state, "request_id", None),
        )
        return JSONResponse(status_code=403, content={"error": exc.message})

    return await call_next(request)
