"""
Anonymous user API router.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from backend.api.deps import get_store
from backend.api.models import RegisterRequest, RegionUpdateRequest
from backend.core.store import UserNotFoundError, WishlistStore

router = APIRouter(prefix="/api/user", tags=["Users"])


@router.post("/register")
def register_user(
    request: Optional[RegisterRequest] = None,
    store: WishlistStore = Depends(get_store),
):
    """Create an anonymous user and return its generated id."""
    region = request.region if request else None
    anon_user_id, region = store.register_user(region)
    return {"anonUserId": anon_user_id, "region": region}


@router.put("/{anon_user_id}/region")
def update_region(
    anon_user_id: str,
    request: RegionUpdateRequest,
    store: WishlistStore = Depends(get_store),
):
    """Change a user's region; all of their subscriptions follow."""
    try:
        region = store.set_user_region(anon_user_id, request.region)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return {"region": region}
