from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from euporia.database.engine import get_db
from euporia.database.repositories.wishlist_repository import WishlistRepository
from euporia.schemas import WishlistAdd
from euporia.utils.timestamps import as_utc

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("/{session_id}")
def list_wishlist(session_id: str, db: Session = Depends(get_db)):
    items = WishlistRepository(db).list_for_session(session_id)
    return {
        "items": [
            {
                "id": item.id,
                "product_handle": item.product_handle,
                "product_title": item.product_title,
                "product_image": item.product_image,
                "product_price": item.product_price,
                "created_at": as_utc(item.created_at).isoformat(),
            }
            for item in items
        ]
    }


@router.post("/{session_id}")
def add_wishlist_item(session_id: str, data: WishlistAdd, db: Session = Depends(get_db)):
    # Re-adding a product already on the list still reports "added"
    item_id = WishlistRepository(db).add(session_id=session_id, **data.model_dump())
    return {"id": item_id, "status": "added"}


@router.delete("/{session_id}/{item_id}")
def delete_wishlist_item(session_id: str, item_id: str, db: Session = Depends(get_db)):
    WishlistRepository(db).remove(session_id, item_id)
    return {"status": "deleted"}
