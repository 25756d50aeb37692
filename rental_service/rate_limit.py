import logging

from fastapi import Request, Response
from fastapi_limiter.depends import RateLimiter
from redis.exceptions import RedisError

from .config import settings

logger = logging.getLogger("rental_service")


def rate_limit(times: int, minutes: int):
    """
    Route dependency limiting calls per client IP. Does nothing when
    RATE_LIMIT_ENABLED is off or the limiter could not reach Redis at startup.
    A Redis failure during a request lets the request through.
    """
    limiter = RateLimiter(times=times, minutes=minutes)

    async def dependency(request: Request, response: Response):
        if not settings.RATE_LIMIT_ENABLED:
            return
        if not getattr(request.app.state, "rate_limiter_ready", False):
            return
        try:
            await limiter(request, response)
        except RedisError as e:
            logger.warning(f"Rate limiter unavailable, skipping limit for {request.url.path}: {e}")

    return dependency
