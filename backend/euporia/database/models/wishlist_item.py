import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from euporia.database.engine import Base


class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (
        UniqueConstraint("session_id", "product_handle", name="uq_wishlist_session_product"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id: Mapped[str] = mapped_column(String(255), index=True)
    product_handle: Mapped[str] = mapped_column(String(255))

    # Display snapshot taken when the item was added; price is the formatted string shown in the UI
    product_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    product_image: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    product_price: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
