"""
Pydantic request models for the API.
"""
from pydantic import BaseModel
from typing import Optional


# ============== Users ==============

class RegisterRequest(BaseModel):
    region: Optional[str] = None


class RegionUpdateRequest(BaseModel):
    region: Optional[str] = None


# ============== Wishlist ==============

class WishlistAddRequest(BaseModel):
    """skinId is checked by the router so a missing id is a 400, not a 422."""
    skinId: Optional[str] = None
    skinName: Optional[str] = None
    source: Optional[str] = None
