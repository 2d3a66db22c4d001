from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from euporia.database.engine import Base


class CartSession(Base):
    __tablename__ = "cart_sessions"

    session_id: Mapped[str] = mapped_column(String(255), primary_key=True)

    # Storefront cart id (e.g. "gid://shopify/Cart/...") — opaque to us
    cart_id: Mapped[str] = mapped_column(String(500))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
