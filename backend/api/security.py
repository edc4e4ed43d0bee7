"""
Worker API key dependency for the internal endpoints.
"""
import logging
from typing import Optional

from fastapi import Header, HTTPException

from backend.core.config import get_settings

logger = logging.getLogger(__name__)


def require_worker_key(x_api_key: Optional[str] = Header(None)) -> None:
    """Require X-API-Key to match WORKER_API_KEY in production."""
    settings = get_settings()
    if not settings.is_production:
        return
    if not settings.WORKER_API_KEY or x_api_key != settings.WORKER_API_KEY:
        logger.warning("Rejected internal request with missing or invalid worker key")
        raise HTTPException(status_code=401, detail="Unauthorized")
