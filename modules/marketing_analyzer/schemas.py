# modules/marketing_analyzer/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from modules.marketing_analyzer.services.services_analysis_core import MAX_CONVERSIONS


class AnalysisRequest(BaseModel):
    """Body of POST /analyze."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    ad_spend: float = Field(alias="adSpend", gt=0, allow_inf_nan=False)
    revenue: float = Field(alias="revenue", gt=0, allow_inf_nan=False)
    conversions: int = Field(default=0, alias="conversions", ge=0, le=MAX_CONVERSIONS)
    user_id: str | None = Field(default=None, alias="userId")

    @field_validator("ad_spend", "revenue", mode="before")
    @classmethod
    def _required_number(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("missing_value", "Field required")
        if isinstance(v, bool):
            raise PydanticCustomError("not_a_number", "Input should be a number")
        return v

    @field_validator("conversions", mode="before")
    @classmethod
    def _conversions_default(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0
        if isinstance(v, bool):
            raise PydanticCustomError("not_a_number", "Input should be a number")
        return v

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id_text(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class AnalysisOut(BaseModel):
    """One stored record as returned in history lists."""

    id: int
    adSpend: float
    revenue: float
    conversions: int
    roi: float
    cpa: float | None
    date: str | None
    userId: str | None


class AnalyzeResponse(BaseModel):
    roi: str
    cpa: str
    suggestion: str
    analysisId: int
    history: list[AnalysisOut]
