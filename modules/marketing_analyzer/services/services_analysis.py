# modules/marketing_analyzer/services/services_analysis.py
"""
Analysis service – Marketing Analyzer

✔ Single validation pass (typed AnalysisRequest or AnalysisValidationError)
✔ Exact decimal metrics (ROI, CPA) + three-tier suggestion
✔ Append-only persistence
✔ Bounded history, newest first
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.formatting import fmt_money, fmt_percent, iso_utc, to_decimal
from core.models import AnalysisRecord
from modules.marketing_analyzer.schemas import AnalysisRequest
from modules.marketing_analyzer.services.services_analysis_core import (
    ANALYZE_HISTORY_LIMIT,
    HIGH_ROI_THRESHOLD,
    HISTORY_LIMIT,
    MEDIUM_ROI_THRESHOLD,
    NO_CONVERSION_DATA,
    AnalysisValidationError,
    StorageError,
    SuggestionTier,
    ValidationReason,
)
from modules.marketing_analyzer.services.services_analysis_logging import (
    log_analysis_error,
    log_analysis_event,
)


# =========================================================
# VALIDATION
# =========================================================

_NUMBER_ERROR_TYPES = {
    "float_parsing",
    "float_type",
    "int_parsing",
    "int_type",
    "int_from_float",
    "finite_number",
    "not_a_number",
}


def _reason_for(error: dict[str, Any]) -> ValidationReason:
    err_type = error.get("type")
    field = error["loc"][0] if error.get("loc") else None

    if err_type in ("missing", "missing_value"):
        return ValidationReason.MISSING_FIELD
    if err_type == "greater_than":
        return ValidationReason.NOT_POSITIVE
    if err_type == "greater_than_equal" and field == "conversions":
        return ValidationReason.NEGATIVE_CONVERSIONS
    if err_type == "less_than_equal":
        return ValidationReason.OUT_OF_RANGE
    if err_type in _NUMBER_ERROR_TYPES:
        return ValidationReason.NOT_A_NUMBER
    return ValidationReason.INVALID_FIELD


def parse_analysis_request(raw: Any) -> AnalysisRequest:
    """
    Validates a decoded JSON body.

    Raises AnalysisValidationError with the first failing field.
    """
    if not isinstance(raw, dict):
        raise AnalysisValidationError(ValidationReason.INVALID_BODY)

    try:
        return AnalysisRequest.model_validate(raw)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else None
        raise AnalysisValidationError(_reason_for(first), field=field) from exc


# =========================================================
# METRICS
# =========================================================

@dataclass(frozen=True)
class AnalysisMetrics:
    roi: Decimal
    cpa: Decimal | None
    tier: SuggestionTier

    @property
    def suggestion(self) -> str:
        return self.tier.message


def compute_roi(ad_spend: Any, revenue: Any) -> Decimal:
    spend = to_decimal(ad_spend)
    if spend <= 0:
        raise AnalysisValidationError(ValidationReason.NOT_POSITIVE, field="adSpend")
    return (to_decimal(revenue) - spend) / spend * 100


def compute_cpa(ad_spend: Any, conversions: int) -> Decimal | None:
    if conversions <= 0:
        return None
    return to_decimal(ad_spend) / Decimal(conversions)


def select_suggestion(roi: Any) -> SuggestionTier:
    """
    roi > 100 -> HIGH, 50 < roi <= 100 -> MEDIUM, roi <= 50 -> LOW.
    Compared on the unrounded value.
    """
    value = to_decimal(roi)
    if value > HIGH_ROI_THRESHOLD:
        return SuggestionTier.HIGH
    if value > MEDIUM_ROI_THRESHOLD:
        return SuggestionTier.MEDIUM
    return SuggestionTier.LOW


def compute_metrics(req: AnalysisRequest) -> AnalysisMetrics:
    roi = compute_roi(req.ad_spend, req.revenue)

    # roi is stored as a float column and returned as JSON
    if not math.isfinite(float(roi)):
        raise AnalysisValidationError(ValidationReason.OUT_OF_RANGE, field="revenue")

    return AnalysisMetrics(
        roi=roi,
        cpa=compute_cpa(req.ad_spend, req.conversions),
        tier=select_suggestion(roi),
    )


def format_cpa(cpa: Any, currency: str) -> str:
    if cpa is None:
        return NO_CONVERSION_DATA
    return fmt_money(cpa, currency)


# =========================================================
# PERSISTENCE
# =========================================================

def create_analysis(db: Session, req: AnalysisRequest, metrics: AnalysisMetrics) -> AnalysisRecord:
    record = AnalysisRecord(
        ad_spend=req.ad_spend,
        revenue=req.revenue,
        conversions=req.conversions,
        roi=float(metrics.roi),
        cpa=float(metrics.cpa) if metrics.cpa is not None else None,
        user_id=req.user_id,
    )

    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as exc:
        db.rollback()
        log_analysis_error("analysis_write_failed", user_id=req.user_id, error=exc)
        raise StorageError(str(exc), operation="write") from exc

    return record


def list_history(db: Session, *, user_id: str | None = None, limit: int = HISTORY_LIMIT) -> list[AnalysisRecord]:
    """
    Most recent records first. Without user_id the query is unscoped.
    """
    try:
        q = db.query(AnalysisRecord)
        if user_id is not None:
            q = q.filter(AnalysisRecord.user_id == user_id)
        return (
            q.order_by(AnalysisRecord.date.desc(), AnalysisRecord.id.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        log_analysis_error("history_read_failed", user_id=user_id, error=exc)
        raise StorageError(str(exc), operation="read") from exc


def serialize_record(record: AnalysisRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "adSpend": record.ad_spend,
        "revenue": record.revenue,
        "conversions": record.conversions,
        "roi": record.roi,
        "cpa": record.cpa,
        "date": iso_utc(record.date),
        "userId": record.user_id,
    }


# =========================================================
# USE CASES
# =========================================================

def analyze(db: Session, req: AnalysisRequest, *, currency: str) -> dict[str, Any]:
    """
    Computes metrics, stores the record and returns the response payload
    with the latest ANALYZE_HISTORY_LIMIT records (including the new one).

    Everything that can fail on the input runs before the write.
    """
    metrics = compute_metrics(req)
    roi_text = fmt_percent(metrics.roi)
    cpa_text = format_cpa(metrics.cpa, currency)

    record = create_analysis(db, req, metrics)
    history = list_history(db, user_id=req.user_id, limit=ANALYZE_HISTORY_LIMIT)

    log_analysis_event(
        "analysis_created",
        user_id=req.user_id,
        analysis_id=record.id,
        roi=str(metrics.roi),
        tier=metrics.tier.value,
    )

    return {
        "roi": roi_text,
        "cpa": cpa_text,
        "suggestion": metrics.suggestion,
        "analysisId": record.id,
        "history": [serialize_record(r) for r in history],
    }


def fetch_history(db: Session, *, user_id: str | None = None) -> list[dict[str, Any]]:
    user_id = (user_id or "").strip() or None
    records = list_history(db, user_id=user_id, limit=HISTORY_LIMIT)
    log_analysis_event("history_fetched", user_id=user_id, count=len(records))
    return [serialize_record(r) for r in records]
