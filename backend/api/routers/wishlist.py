"""
Wishlist API router.
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from backend.api.deps import get_store
from backend.api.models import WishlistAddRequest
from backend.core.store import UserNotFoundError, WishlistStore
from backend.core.topics import DEFAULT_SOURCE

router = APIRouter(prefix="/api/wishlist", tags=["Wishlist"])


@router.post("/{anon_user_id}")
def add_to_wishlist(
    anon_user_id: str,
    request: WishlistAddRequest,
    store: WishlistStore = Depends(get_store),
):
    """Add a skin to the wishlist, creating the user if needed."""
    if not request.skinId:
        raise HTTPException(status_code=400, detail="skinId required")
    item, topic = store.add_item(
        anon_user_id,
        request.skinId,
        skin_name=request.skinName,
        source=request.source,
    )
    return {"success": True, "item": item.to_dict(), "topic": topic}


@router.delete("/{anon_user_id}/{skin_id}")
def remove_from_wishlist(
    anon_user_id: str,
    skin_id: str,
    source: str = Query(DEFAULT_SOURCE),
    store: WishlistStore = Depends(get_store),
):
    """Remove a skin/source pair from the wishlist."""
    try:
        removed = store.remove_item(anon_user_id, skin_id, source)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "removed": removed}


@router.get("/{anon_user_id}")
def get_wishlist(anon_user_id: str, store: WishlistStore = Depends(get_store)):
    """Get a user's wishlist and topics. Unknown users get an empty list."""
    return store.get_user(anon_user_id)
