"""
Shared FastAPI dependencies.
"""
from fastapi import Request

from backend.core.store import WishlistStore


def get_store(request: Request) -> WishlistStore:
    """The WishlistStore owned by the running app."""
    return request.app.state.store
