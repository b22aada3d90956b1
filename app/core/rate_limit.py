from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.core.config import settings

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-route limit; the general API limit unless a stricter one is given."""
    return limiter.limit(limit or settings.rate_limit)


def upload_rate_limit():
    return rate_limit(settings.upload_rate_limit)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("rate_limit_exceeded path=%s client=%s limit=%s", request.url.path, get_remote_address(request), exc.detail)
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later."},
    )
