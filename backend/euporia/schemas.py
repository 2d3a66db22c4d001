from typing import Any, Optional

from pydantic import BaseModel


class ProfileSave(BaseModel):
    profile: Any


class ConversationCreate(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None
    icon: Optional[str] = None


class ConversationUpdate(BaseModel):
    title: Optional[str] = None
    messages: Optional[list[Any]] = None
    category: Optional[str] = None
    icon: Optional[str] = None


class InsightSave(BaseModel):
    insight: Any


class CartSessionSave(BaseModel):
    cart_id: str


class WishlistAdd(BaseModel):
    product_handle: str
    product_title: Optional[str] = None
    product_image: Optional[str] = None
    product_price: Optional[str] = None
