"""
Internal API router for the notification worker.

Every endpoint reads the subscription index only and requires the worker
key in production.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from backend.api.deps import get_store
from backend.api.security import require_worker_key
from backend.core.store import WishlistStore
from backend.core.topics import normalize_region

router = APIRouter(
    prefix="/api/internal",
    tags=["Internal"],
    dependencies=[Depends(require_worker_key)],
)


@router.get("/subscriptions/{skin_id}")
def get_skin_subscriptions(skin_id: str, store: WishlistStore = Depends(get_store)):
    """Users waiting for a skin, with the topic for each."""
    return {"subscriptions": store.subscriptions_for_skin(skin_id)}


@router.get("/active-skins")
def get_active_skins(
    source: Optional[str] = Query(None),
    store: WishlistStore = Depends(get_store),
):
    """Every wished-for skin with the regions it is wanted in."""
    skins = store.active_skins(source)
    return {"count": len(skins), "skins": skins}


@router.get("/regions/{region}/topics")
def get_region_topics(
    region: str,
    source: Optional[str] = Query(None),
    store: WishlistStore = Depends(get_store),
):
    """All topics with subscribers in one region."""
    topics = store.topics_for_region(region, source)
    return {"region": normalize_region(region), "count": len(topics), "topics": topics}
