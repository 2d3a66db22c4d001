"""
Taste Profile Repository
────────────────────────
Last-write-wins storage of one taste profile per session.
A save always replaces the whole document; there is no merge.
"""
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from euporia.database.documents import dump_document, load_document
from euporia.database.models.taste_profile import TasteProfile
from euporia.database.upsert import insert_for
from euporia.utils.logger import get_logger

logger = get_logger(__name__)


class TasteProfileRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, session_id: str) -> TasteProfile | None:
        stmt = (
            select(TasteProfile)
            .where(TasteProfile.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_profile(self, session_id: str) -> tuple[bool, Any]:
        """Return ``(found, document)``. A stored profile may itself be JSON ``null``."""
        row = self.get(session_id)
        if row is None:
            return False, None
        return True, load_document(row.profile_json)

    def save(self, session_id: str, profile: Any) -> None:
        profile_json = dump_document(profile)

        stmt = insert_for(self.db, TasteProfile).values(
            session_id=session_id,
            profile_json=profile_json,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["session_id"],
            set_={
                "profile_json": stmt.excluded.profile_json,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        self.db.execute(stmt)
        self.db.commit()
        logger.info("save — taste profile upserted: session=%s bytes=%d", session_id, len(profile_json))
