# modules/marketing_analyzer/services/services_analysis_logging.py
"""
Structured logging – Analysis module

✔ JSON lines (machine-readable)
✔ Child logger per domain (analysis)
✔ Safe with non-serializable payloads
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from core.logging_config import logger


# ============================
#   DOMAIN LOGGER
# ============================

analysis_logger = logger.getChild("analysis")


# ============================
#   HELPERS
# ============================

def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _safe_json(payload: dict[str, Any]) -> str:
    """
    Serializes to JSON; non-serializable values fall back to str().
    """
    try:
        return json.dumps(payload, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        safe_payload = {k: str(v) for k, v in payload.items()}
        return json.dumps(safe_payload, ensure_ascii=False)


def _base_payload(*, event: str, tipo: str, user_id: str | None, **extra: Any) -> dict[str, Any]:
    return {
        "ts": _utc_iso(),
        "domain": "analysis",
        "event": f"analysis.{event}",
        "type": tipo,  # event | error
        "user_id": user_id,
        **extra,
    }


# ============================
#   PUBLIC
# ============================

def log_analysis_event(event: str, *, user_id: str | None = None, **extra: Any) -> None:
    """
    Normal event, e.g. analysis_created, history_fetched.
    """
    analysis_logger.info(_safe_json(_base_payload(event=event, tipo="event", user_id=user_id, **extra)))


def log_analysis_error(
    event: str,
    *,
    user_id: str | None = None,
    error: Exception | None = None,
    **extra: Any,
) -> None:
    if error is not None:
        extra.setdefault("error_type", type(error).__name__)
        extra.setdefault("error_message", str(error))

    analysis_logger.error(_safe_json(_base_payload(event=event, tipo="error", user_id=user_id, **extra)))
