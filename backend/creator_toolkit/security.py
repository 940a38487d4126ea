from __future__ import annotations

import json
import logging
import secrets
from dataclasses import dataclass

from fastapi import Depends, Request
from redis.asyncio import Redis
from redis.exceptions import RedisError

from creator_toolkit.context import AppContext, get_context
from creator_toolkit.errors import StoreUnavailable, Unauthenticated

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str | None = None


def _bearer_token(auth_header: str | None) -> str | None:
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


class AuthProvider:
    async def current_identity(self, request: Request) -> Identity | None:
        raise NotImplementedError


class AnonymousOnlyAuthProvider(AuthProvider):
    """Used when no session store is configured: every caller is anonymous."""

    async def current_identity(self, request: Request) -> Identity | None:
        return None


class SessionAuthProvider(AuthProvider):
    """Resolves ``Authorization: Bearer <token>`` against ``sess:<token>`` keys in redis.

    The sign-in service writes those keys (see ``create_session``); an unknown,
    expired or unreadable session is treated as anonymous.
    """

    def __init__(self, redis: Redis, session_ttl_seconds: int):
        self.redis = redis
        self.session_ttl_seconds = session_ttl_seconds

    async def current_identity(self, request: Request) -> Identity | None:
        token = _bearer_token(request.headers.get("authorization"))
        if not token:
            return None
        try:
            raw = await self.redis.get(f"sess:{token}")
        except RedisError as e:
            # a store outage must not downgrade a metered caller to anonymous
            raise StoreUnavailable(detail={"step": "session"}) from e
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return Identity(user_id=data["user_id"], email=data.get("email"))
        except (ValueError, KeyError, TypeError):
            log.warning("session_unreadable")
            return None

    async def create_session(self, user_id: str, email: str | None = None) -> str:
        token = secrets.token_urlsafe(32)
        value = json.dumps({"user_id": user_id, "email": email})
        await self.redis.set(f"sess:{token}", value, ex=self.session_ttl_seconds)
        return token


async def get_identity(request: Request, ctx: AppContext = Depends(get_context)) -> Identity | None:
    return await ctx.auth.current_identity(request)


async def require_identity(identity: Identity | None = Depends(get_identity)) -> Identity:
    if identity is None:
        raise Unauthenticated()
    return identity
