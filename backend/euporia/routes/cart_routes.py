from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from euporia.database.engine import get_db
from euporia.database.repositories.cart_session_repository import CartSessionRepository
from euporia.schemas import CartSessionSave

router = APIRouter(prefix="/cart-session", tags=["cart"])


@router.get("/{session_id}")
def get_cart_session(session_id: str, db: Session = Depends(get_db)):
    cart = CartSessionRepository(db).get(session_id)
    if cart is None:
        raise HTTPException(status_code=404, detail="No cart for this session")
    return {"cart_id": cart.cart_id}


@router.post("/{session_id}")
def save_cart_session(session_id: str, data: CartSessionSave, db: Session = Depends(get_db)):
    CartSessionRepository(db).save(session_id, data.cart_id)
    return {"status": "saved"}
