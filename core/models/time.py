# core/models/time.py
from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """UTC tz-aware now (column default for every timestamp)."""
    return datetime.now(timezone.utc)
