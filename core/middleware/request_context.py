# core/middleware/request_context.py
"""
Request context middleware – Marketing Analyzer

✔ unique request_id (echoed as X-Request-ID)
✔ client ip (X-Forwarded-For only with TRUST_PROXY)
✔ available through request.state
"""

from __future__ import annotations

import uuid

from fastapi import Request
from starlette.responses import Response


def client_ip(request: Request, *, trust_proxy: bool = False) -> str:
    if trust_proxy:
        first = (request.headers.get("x-forwarded-for") or "").split(",")[0].strip()
        if first:
            return first
    if request.client:
        return request.client.host
    return "unknown"


async def request_context_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    settings = request.app.state.ctx.settings

    request.state.request_id = request_id
    request.state.client_ip = client_ip(request, trust_proxy=settings.TRUST_PROXY)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
