import logging
from typing import Any
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.middleware import SlowAPIMiddleware

from string_analyzer.config import settings

logger = logging.getLogger("string_analyzer.limiter")


def default_limit() -> str:
    return f"{settings.RATE_LIMIT} per {settings.RATE_LIMIT_WINDOW} seconds"


def create_limiter(enabled: bool = settings.RATE_LIMIT_ENABLED) -> Limiter:
    """In-memory limiter applied to every route through SlowAPIMiddleware."""
    try:
        return Limiter(key_func=get_remote_address, default_limits=[default_limit()], enabled=enabled)
    except Exception:
        logger.exception("Failed to create slowapi Limiter")
        raise


limiter = create_limiter()


def get_middleware() -> Any:
    return SlowAPIMiddleware
