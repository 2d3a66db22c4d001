from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from euporia.database.engine import get_db
from euporia.database.repositories.taste_profile_repository import TasteProfileRepository
from euporia.schemas import ProfileSave

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/{session_id}")
def get_profile(session_id: str, db: Session = Depends(get_db)):
    found, profile = TasteProfileRepository(db).get_profile(session_id)
    if not found:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"session_id": session_id, "profile": profile}


@router.post("/{session_id}")
def save_profile(session_id: str, data: ProfileSave, db: Session = Depends(get_db)):
    TasteProfileRepository(db).save(session_id, data.profile)
    return {"session_id": session_id, "status": "saved"}
