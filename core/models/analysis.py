# core/models/analysis.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, CheckConstraint

from core.database import Base
from core.models.time import utcnow


class AnalysisRecord(Base):
    """
    One campaign submission with its derived metrics.
    Rows are append-only: nothing in the service updates or deletes them.
    """
    __tablename__ = "analyses"

    id = Column(Integer, primary_key=True)

    ad_spend = Column(Float, nullable=False)
    revenue = Column(Float, nullable=False)
    conversions = Column(Integer, nullable=False, default=0)

    # Derived (see services_analysis.compute_metrics)
    roi = Column(Float, nullable=False)
    cpa = Column(Float, nullable=True)  # NULL when conversions == 0

    date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Free-text correlation key, no uniqueness
    user_id = Column(String, nullable=True, index=True)

    __table_args__ = (
        CheckConstraint("ad_spend > 0", name="ck_analyses_ad_spend_positive"),
        CheckConstraint("revenue > 0", name="ck_analyses_revenue_positive"),
        CheckConstraint("conversions >= 0", name="ck_analyses_conversions_non_negative"),
        Index("ix_analyses_user_id_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<AnalysisRecord id={self.id} user_id={self.user_id!r} roi={self.roi}>"
