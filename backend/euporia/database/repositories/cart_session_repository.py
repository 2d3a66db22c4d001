from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from euporia.database.models.cart_session import CartSession
from euporia.database.upsert import insert_for
from euporia.utils.logger import get_logger

logger = get_logger(__name__)


class CartSessionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, session_id: str) -> CartSession | None:
        stmt = (
            select(CartSession)
            .where(CartSession.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def save(self, session_id: str, cart_id: str) -> None:
        """Point the session at ``cart_id``, replacing any previous cart."""
        stmt = insert_for(self.db, CartSession).values(session_id=session_id, cart_id=cart_id)
        stmt = stmt.on_conflict_do_update(
            index_elements=["session_id"],
            set_={
                "cart_id": stmt.excluded.cart_id,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        self.db.execute(stmt)
        self.db.commit()
        logger.info("save — cart session upserted: session=%s cart_id=%s", session_id, cart_id)
