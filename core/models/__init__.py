# core/models/__init__.py
"""
ORM models – Marketing Analyzer

✔ Single append-only collection (analyses)
✔ UTC timezone-aware timestamps
"""

from __future__ import annotations

from core.models.analysis import AnalysisRecord
from core.models.time import utcnow

__all__ = [
    "AnalysisRecord",
    "utcnow",
]
