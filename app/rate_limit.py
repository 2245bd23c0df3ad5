"""Shared rate limiter instance.

Kept out of main.py so route modules can apply per-endpoint limits via
``@limiter.limit()`` without importing the application.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.config import get_settings


def _get_client_ip(request: Request) -> str:
    """Extract the real client IP, respecting X-Forwarded-For behind a proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First entry is the original client; proxies append their own.
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


_settings = get_settings()

limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[_settings.rate_limit_default],
    enabled=_settings.rate_limit_enabled,
)
