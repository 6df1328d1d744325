from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_match.core.config import settings

limiter = Limiter(key_func=get_remote_address)


def rate_limit(limit: str | None = None):
    """Per-client limit for a route; ``settings.rate_limit`` unless overridden.

    A no-op when RATE_LIMIT_ENABLED is off.
    """
    if not settings.rate_limit_enabled:
        def passthrough(func):
            return func

        return passthrough
    return limiter.limit(limit or settings.rate_limit)
