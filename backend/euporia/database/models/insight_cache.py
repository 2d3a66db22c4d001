"""
AI Insight Cache Model
──────────────────────
Precomputed product insights (review synthesis, fit notes, ...) keyed by
``"<store>:<product_handle>"`` or just ``"<product_handle>"``.

Rows are only considered valid while ``expires_at`` is in the future.
Expired rows are removed lazily when read, or by ``purge_insights.py``.
"""
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from euporia.database.engine import Base


class InsightCacheEntry(Base):
    __tablename__ = "ai_insights_cache"

    cache_key: Mapped[str] = mapped_column(String(500), primary_key=True)
    insight_json: Mapped[str] = mapped_column(Text)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
