# core/routes/routes_health.py
"""
Health routes – Marketing Analyzer

✔ Public, JSON only
✔ 503 when the database is unreachable
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from core.database import get_db
from core.models.time import utcnow
from core.services.services_observability import get_app_health


router = APIRouter(tags=["health"])


@router.get("/")
async def root(request: Request):
    return {"status": "healthy", "service": request.app.state.ctx.settings.APP_NAME}


@router.get("/health")
async def health(db: Session = Depends(get_db)):
    start = utcnow()

    payload: dict[str, Any] = get_app_health(db)
    ts_dt = utcnow()

    payload["timestamp_utc"] = ts_dt.isoformat()
    payload["elapsed_ms"] = round((ts_dt - start).total_seconds() * 1000, 2)

    status_code = 200 if payload["status"] == "ok" else 503
    return JSONResponse(status_code=status_code, content=payload)
