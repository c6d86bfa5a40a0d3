# modules/marketing_analyzer/routes/routes_analysis.py
"""
Analysis routes – Marketing Analyzer

✔ POST /analyze  -> metrics + suggestion + stored record + last 5
✔ GET  /history  -> last 10 (optionally per userId)
✔ Domain errors mapped to JSON responses here (services stay HTTP-free)
"""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from core.database import get_db
from modules.marketing_analyzer.schemas import AnalysisOut, AnalyzeResponse
from modules.marketing_analyzer.services.services_analysis import (
    analyze,
    fetch_history,
    parse_analysis_request,
)
from modules.marketing_analyzer.services.services_analysis_core import (
    AnalysisValidationError,
    StorageError,
    ValidationReason,
)
from modules.marketing_analyzer.services.services_analysis_logging import log_analysis_error

router = APIRouter(tags=["analysis"])


# =========================================================
# Helpers
# =========================================================

def _storage_error_response(exc: StorageError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "details": exc.detail},
    )


async def _read_json(request: Request):
    body = await request.body()
    if not body:
        raise AnalysisValidationError(ValidationReason.INVALID_BODY)
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise AnalysisValidationError(
            ValidationReason.INVALID_BODY,
            message="Request body is not valid JSON",
        ) from exc


# =========================================================
# Endpoints
# =========================================================

@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"description": "Invalid input"}, 403: {"description": "Invalid API key"}},
)
async def analyze_campaign(
    request: Request,
    db: Session = Depends(get_db),
):
    settings = request.app.state.ctx.settings

    try:
        req = parse_analysis_request(await _read_json(request))
        payload = analyze(db, req, currency=settings.CURRENCY)
    except AnalysisValidationError as exc:
        log_analysis_error(
            "analysis_validation_failed",
            reason=exc.reason.value,
            field=exc.field,
            request_id=getattr(request.state, "request_id", None),
        )
        return JSONResponse(status_code=400, content=exc.to_dict())
    except StorageError as exc:
        return _storage_error_response(exc)

    return JSONResponse(status_code=200, content=payload)


@router.get("/history", response_model=list[AnalysisOut])
async def analysis_history(
    userId: str | None = None,
    db: Session = Depends(get_db),
):
    try:
        records = fetch_history(db, user_id=userId)
    except StorageError as exc:
        return _storage_error_response(exc)

    return JSONResponse(status_code=200, content=records)
