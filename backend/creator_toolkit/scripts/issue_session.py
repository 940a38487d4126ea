"""Write a session for a user id into redis and print the bearer token (local development)."""
from __future__ import annotations

import argparse
import asyncio

from creator_toolkit.config import settings
from creator_toolkit.redis_client import create_redis
from creator_toolkit.security import SessionAuthProvider


async def main(user_id: str, email: str | None):
    redis = create_redis(settings.redis_url)
    if redis is None:
        raise SystemExit("REDIS_URL is not set")
    try:
        token = await SessionAuthProvider(redis, settings.session_ttl_seconds).create_session(user_id, email)
    finally:
        await redis.aclose()
    print(token)


if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("user_id")
    p.add_argument("--email")
    args = p.parse_args()
    asyncio.run(main(args.user_id, args.email))
