"""
Wishlist Repository
───────────────────
At most one row per (session, product handle). Adding a product that is
already on the list is a silent no-op, not an error.
"""
import uuid

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from euporia.database.models.wishlist_item import WishlistItem
from euporia.database.upsert import insert_for
from euporia.utils.logger import get_logger

logger = get_logger(__name__)


class WishlistRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_session(self, session_id: str) -> list[WishlistItem]:
        stmt = (
            select(WishlistItem)
            .where(WishlistItem.session_id == session_id)
            .order_by(WishlistItem.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def add(
        self,
        *,
        session_id: str,
        product_handle: str,
        product_title: str | None = None,
        product_image: str | None = None,
        product_price: str | None = None,
    ) -> str:
        """
        Insert the item unless the session already has this product.

        Always returns a freshly generated id; when the product was already
        present that id was never stored.
        """
        item_id = str(uuid.uuid4())
        stmt = insert_for(self.db, WishlistItem).values(
            id=item_id,
            session_id=session_id,
            product_handle=product_handle,
            product_title=product_title,
            product_image=product_image,
            product_price=product_price,
        )
        stmt = stmt.on_conflict_do_nothing(index_elements=["session_id", "product_handle"])
        result = self.db.execute(stmt)
        self.db.commit()

        logger.info(
            "add — session=%s handle=%s inserted=%s",
            session_id,
            product_handle,
            result.rowcount > 0,
        )
        return item_id

    def remove(self, session_id: str, item_id: str) -> bool:
        """Delete an item only if it belongs to ``session_id``."""
        result = self.db.execute(
            delete(WishlistItem).where(
                WishlistItem.id == item_id,
                WishlistItem.session_id == session_id,
            )
        )
        self.db.commit()
        logger.info("remove — session=%s id=%s deleted=%s", session_id, item_id, result.rowcount > 0)
        return result.rowcount > 0
