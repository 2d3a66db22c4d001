"""
Taste Profile Model
───────────────────
One taste-profile document per browser session.
The document is stored as a JSON text blob and never interpreted here.
"""
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from euporia.database.engine import Base


class TasteProfile(Base):
    __tablename__ = "taste_profiles"

    session_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    profile_json: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
