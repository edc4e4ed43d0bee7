"""
API Routers package.

Each module contains a FastAPI router for a specific domain.
"""

from .users import router as users_router
from .wishlist import router as wishlist_router
from .internal import router as internal_router

__all__ = [
    "users_router",
    "wishlist_router",
    "internal_router",
]
