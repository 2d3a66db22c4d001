"""
Conversation Repository
───────────────────────
Sidebar metadata lives in ``conversations``; the message list lives in a
separate 1:1 ``conversation_messages`` row so listing never loads blobs.

  • create  — both rows in one transaction (messages start as ``[]``)
  • get     — LEFT JOIN; a missing messages row reads as ``[]``
  • update  — title/category/icon and messages are independently optional;
              messages are replaced wholesale, ``updated_at`` always advances
  • delete  — removes both rows in one transaction
"""
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from euporia.database.documents import dump_document, load_document
from euporia.database.models.conversation import DEFAULT_TITLE, Conversation, ConversationMessages
from euporia.database.upsert import insert_for
from euporia.utils.logger import get_logger

logger = get_logger(__name__)


class ConversationRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_session(self, session_id: str) -> list[Conversation]:
        """Most recently updated first. An unknown session just has no conversations."""
        stmt = (
            select(Conversation)
            .where(Conversation.session_id == session_id)
            .order_by(Conversation.updated_at.desc())
        )
        results = list(self.db.execute(stmt).scalars().all())
        logger.debug("list_for_session — session=%s records_returned=%d", session_id, len(results))
        return results

    def create(
        self,
        session_id: str,
        title: str | None = None,
        *,
        category: str | None = None,
        icon: str | None = None,
    ) -> Conversation:
        conversation = Conversation(
            id=str(uuid.uuid4()),
            session_id=session_id,
            title=title if title is not None else DEFAULT_TITLE,
            category=category,
            icon=icon,
        )
        self.db.add(conversation)
        # Parent row must exist before the FK'd messages row
        self.db.flush()
        self.db.add(ConversationMessages(conversation_id=conversation.id, messages_json="[]"))
        self.db.commit()
        self.db.refresh(conversation)

        logger.info(
            "create — conversation created: session=%s id=%s title=%r",
            session_id,
            conversation.id,
            conversation.title,
        )
        return conversation

    def get(self, conversation_id: str) -> tuple[Conversation, list[Any]] | None:
        stmt = (
            select(Conversation, func.coalesce(ConversationMessages.messages_json, "[]"))
            .outerjoin(ConversationMessages, ConversationMessages.conversation_id == Conversation.id)
            .where(Conversation.id == conversation_id)
        )
        row = self.db.execute(stmt).first()
        if row is None:
            return None

        conversation, messages_json = row
        return conversation, load_document(messages_json)

    def update(
        self,
        conversation_id: str,
        *,
        title: str | None = None,
        messages: list[Any] | None = None,
        category: str | None = None,
        icon: str | None = None,
    ) -> bool:
        """Apply the supplied fields. Returns False (and writes nothing) for an unknown id."""
        # Serialize up front so a bad document fails before any write
        messages_json = dump_document(messages) if messages is not None else None
        now = datetime.now(timezone.utc)

        values: dict[str, Any] = {"updated_at": now}
        if title is not None:
            values["title"] = title
        if category is not None:
            values["category"] = category
        if icon is not None:
            values["icon"] = icon

        result = self.db.execute(
            update(Conversation).where(Conversation.id == conversation_id).values(**values)
        )
        if result.rowcount == 0:
            self.db.rollback()
            logger.warning("update — no conversation with id=%s", conversation_id)
            return False

        if messages_json is not None:
            stmt = insert_for(self.db, ConversationMessages).values(
                conversation_id=conversation_id,
                messages_json=messages_json,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["conversation_id"],
                set_={"messages_json": stmt.excluded.messages_json, "updated_at": now},
            )
            self.db.execute(stmt)

        self.db.commit()
        logger.info(
            "update — conversation updated: id=%s fields=%s messages=%s",
            conversation_id,
            sorted(k for k in values if k != "updated_at"),
            len(messages) if messages is not None else "-",
        )
        return True

    def delete(self, conversation_id: str) -> bool:
        self.db.execute(
            delete(ConversationMessages).where(ConversationMessages.conversation_id == conversation_id)
        )
        result = self.db.execute(delete(Conversation).where(Conversation.id == conversation_id))
        self.db.commit()

        deleted = result.rowcount > 0
        logger.info("delete — conversation id=%s deleted=%s", conversation_id, deleted)
        return deleted
