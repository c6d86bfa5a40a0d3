# core/middleware/rate_limit.py
from __future__ import annotations

import math

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from core.logging_config import logger
from core.middleware.request_context import client_ip


RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


async def rate_limit_middleware(request: Request, call_next) -> Response:
    limiter = request.app.state.ctx.rate_limiter
    if limiter is None or request.method == "OPTIONS":
        return await call_next(request)

    ip = getattr(request.state, "client_ip", None) or client_ip(
        request, trust_proxy=request.app.state.ctx.settings.TRUST_PROXY
    )
    decision = limiter.hit(ip)

    headers = {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
    }

    if not decision.allowed:
        logger.warning("[RATE_LIMIT] blocked ip=%s path=%s", ip, request.url.path)
        headers["Retry-After"] = str(max(1, math.ceil(decision.reset_after)))
        return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE}, headers=headers)

    response = await call_next(request)
    response.headers.update(headers)
    return response
