# modules/marketing_analyzer/services/services_analysis_core.py
"""
Domain core – Marketing Analyzer

✅ Rules
- Typed domain errors (no HTTP here)
- Enumerated validation reasons
- Suggestion tiers as a closed enum
"""

from __future__ import annotations

import enum
from typing import Final


# =========================================================
# LIMITS
# =========================================================

ANALYZE_HISTORY_LIMIT: Final[int] = 5
HISTORY_LIMIT: Final[int] = 10

# Upper bound of the conversions column (32-bit INTEGER)
MAX_CONVERSIONS: Final[int] = 2_147_483_647

NO_CONVERSION_DATA: Final[str] = "No conversion data"


# =========================================================
# DOMAIN EXCEPTIONS
# =========================================================

class AnalysisDomainError(Exception):
    """Domain error for the analysis module."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message


class ValidationReason(str, enum.Enum):
    INVALID_BODY = "invalid_body"
    MISSING_FIELD = "missing_field"
    NOT_A_NUMBER = "not_a_number"
    NOT_POSITIVE = "not_positive"
    NEGATIVE_CONVERSIONS = "negative_conversions"
    OUT_OF_RANGE = "out_of_range"
    INVALID_FIELD = "invalid_field"


_REASON_MESSAGES: Final[dict[ValidationReason, str]] = {
    ValidationReason.INVALID_BODY: "Request body must be a JSON object",
    ValidationReason.MISSING_FIELD: "adSpend and revenue are required and must be positive numbers",
    ValidationReason.NOT_A_NUMBER: "adSpend, revenue and conversions must be numbers",
    ValidationReason.NOT_POSITIVE: "adSpend and revenue must be positive numbers",
    ValidationReason.NEGATIVE_CONVERSIONS: "conversions must be a non-negative integer",
    ValidationReason.OUT_OF_RANGE: "Value is too large to be processed",
    ValidationReason.INVALID_FIELD: "Invalid field value",
}


class AnalysisValidationError(AnalysisDomainError):
    """Rejected submission. Nothing is persisted when this is raised."""

    def __init__(
        self,
        reason: ValidationReason,
        *,
        field: str | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message or _REASON_MESSAGES[reason])
        self.reason: ValidationReason = reason
        self.field: str | None = field

    def to_dict(self) -> dict:
        return {"error": self.message, "field": self.field, "reason": self.reason.value}


class StorageError(AnalysisDomainError):
    """Backend failure on write or read."""

    def __init__(self, detail: str, *, operation: str = "storage") -> None:
        super().__init__(f"{operation} failed: {detail}")
        self.detail: str = detail
        self.operation: str = operation


# =========================================================
# SUGGESTIONS
# =========================================================

class SuggestionTier(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def message(self) -> str:
        return SUGGESTION_MESSAGES[self]


SUGGESTION_MESSAGES: Final[dict[SuggestionTier, str]] = {
    SuggestionTier.HIGH: "Highly effective campaign. Recommend increasing the budget or expanding channels.",
    SuggestionTier.MEDIUM: "Acceptable campaign. Consider optimizing targeting or creative.",
    SuggestionTier.LOW: "Low ROI. Recommend A/B testing or switching ad channels.",
}

# roi > HIGH_ROI_THRESHOLD -> HIGH; roi > MEDIUM_ROI_THRESHOLD -> MEDIUM; else LOW
HIGH_ROI_THRESHOLD: Final[int] = 100
MEDIUM_ROI_THRESHOLD: Final[int] = 50
