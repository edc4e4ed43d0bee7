from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from backend.api.routers import users_router, wishlist_router, internal_router
from backend.core.config import settings
from backend.core.store import WishlistStore

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    logger.info(f"ValoHub backend starting (env={settings.APP_ENV}); wishlist state is in-memory only")

    yield  # Application runs here

    stats = app.state.store.stats()
    logger.info(f"ValoHub backend stopping; discarding {stats['users']} users")


def create_app(store: Optional[WishlistStore] = None) -> FastAPI:
    """Build the app around a store; each call gets its own state."""
    app = FastAPI(title="ValoHub Backend API", version="1.0.0", lifespan=lifespan)
    app.state.store = store if store is not None else WishlistStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "OK"

    @app.get("/health")
    def health_check(request: Request):
        return {
            "status": "ok",
            **request.app.state.store.stats(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(users_router)
    app.include_router(wishlist_router)
    app.include_router(internal_router)
    return app


app = create_app()
