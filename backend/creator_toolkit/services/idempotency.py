from __future__ import annotations

from redis.asyncio import Redis


def _key(user_id: str, idem_key: str) -> str:
    return f"idem:gen:{user_id}:{idem_key}"


async def acquire(redis: Redis, user_id: str, idem_key: str, ttl_seconds: int) -> bool:
    ok = await redis.set(_key(user_id, idem_key), "1", nx=True, ex=ttl_seconds)
    return bool(ok)


async def release(redis: Redis, user_id: str, idem_key: str) -> None:
    await redis.delete(_key(user_id, idem_key))
