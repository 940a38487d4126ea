from __future__ import annotations

from redis.asyncio import Redis


def create_redis(url: str | None) -> Redis | None:
    """Client for the session/idempotency store, or None when no URL is configured."""
    if not url:
        return None
    return Redis.from_url(url, decode_responses=True)
