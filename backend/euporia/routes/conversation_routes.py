from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from euporia.database.engine import get_db
from euporia.database.repositories.conversation_repository import ConversationRepository
from euporia.schemas import ConversationCreate, ConversationUpdate
from euporia.utils.timestamps import as_utc

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("/{session_id}")
def list_conversations(session_id: str, db: Session = Depends(get_db)):
    conversations = ConversationRepository(db).list_for_session(session_id)
    return {
        "conversations": [
            {
                "id": c.id,
                "title": c.title,
                "updated_at": as_utc(c.updated_at).isoformat(),
                "category": c.category,
                "icon": c.icon,
            }
            for c in conversations
        ]
    }


@router.post("/{session_id}")
def create_conversation(
    session_id: str,
    data: Optional[ConversationCreate] = None,
    db: Session = Depends(get_db),
):
    data = data or ConversationCreate()
    conversation = ConversationRepository(db).create(
        session_id,
        data.title,
        category=data.category,
        icon=data.icon,
    )
    return {"id": conversation.id, "title": conversation.title}


# session_id is part of the path for the client's convenience; conversations are looked up by id
@router.get("/{session_id}/{conv_id}")
def get_conversation(session_id: str, conv_id: str, db: Session = Depends(get_db)):
    found = ConversationRepository(db).get(conv_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    conversation, messages = found
    return {"id": conversation.id, "title": conversation.title, "messages": messages}


@router.put("/{session_id}/{conv_id}")
def update_conversation(
    session_id: str,
    conv_id: str,
    data: ConversationUpdate,
    db: Session = Depends(get_db),
):
    updated = ConversationRepository(db).update(
        conv_id,
        title=data.title,
        messages=data.messages,
        category=data.category,
        icon=data.icon,
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return {"status": "updated"}


@router.delete("/{session_id}/{conv_id}")
def delete_conversation(session_id: str, conv_id: str, db: Session = Depends(get_db)):
    ConversationRepository(db).delete(conv_id)
    return {"status": "deleted"}
