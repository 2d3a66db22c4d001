from euporia.database.models.cart_session import CartSession
from euporia.database.models.conversation import Conversation, ConversationMessages
from euporia.database.models.insight_cache import InsightCacheEntry
from euporia.database.models.taste_profile import TasteProfile
from euporia.database.models.wishlist_item import WishlistItem

__all__ = [
    "CartSession",
    "Conversation",
    "ConversationMessages",
    "InsightCacheEntry",
    "TasteProfile",
    "WishlistItem",
]
