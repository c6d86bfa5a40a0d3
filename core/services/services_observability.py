# core/services/services_observability.py
"""
Observability / Health – Marketing Analyzer

✔ DB ping (fast)
✔ Stored analyses count
✔ Global health (ok/degraded)
"""

from __future__ import annotations

from typing import Any, Callable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.logging_config import logger
from core.models import AnalysisRecord


# ============================================================
#  INTERNAL HELPERS
# ============================================================

def _db_select_one(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.exception("[HEALTH][DB] SELECT 1 failed")
        return False


def _safe_count(fn: Callable[[], int], label: str) -> int:
    """
    Returns -1 (and logs) if the count fails.
    """
    try:
        return int(fn())
    except SQLAlchemyError as exc:
        logger.exception("[HEALTH][COUNT] %s failed: %s", label, exc)
        return -1


# ============================================================
#  PUBLIC API
# ============================================================

def check_db_connection(db: Session) -> bool:
    return _db_select_one(db)


def count_analyses(db: Session) -> int:
    return _safe_count(lambda: db.query(AnalysisRecord).count(), "AnalysisRecord.count")


def get_app_health(db: Session) -> dict[str, Any]:
    db_ok = check_db_connection(db)

    health: dict[str, Any] = {
        "status": "ok" if db_ok else "degraded",
        "db": {"ok": db_ok},
    }

    if db_ok:
        total = count_analyses(db)
        health["analyses"] = total
        if total < 0:
            health["status"] = "degraded"
        logger.info("[HEALTH] status=%s analyses=%s", health["status"], total)
    else:
        logger.warning("[HEALTH] status=degraded db_ok=false")

    return health
