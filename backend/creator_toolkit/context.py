"""Composition root: every collaborator the request handlers use, built once per process."""
from __future__ import annotations

import datetime as dt
import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AsyncIterator, Callable

from fastapi import Depends, Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.config import Settings
from creator_toolkit.db import Database, build_database
from creator_toolkit.errors import StoreUnavailable
from creator_toolkit.notify import Notifier
from creator_toolkit.redis_client import create_redis
from creator_toolkit.services.access_policy import AccessPolicy
from creator_toolkit.utils_time import utc_today

if TYPE_CHECKING:
    from creator_toolkit.security import AuthProvider

log = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    database: Database | None  # None: store unconfigured, anonymous-only generation
    redis: Redis | None  # None: no sessions, no idempotency keys
    auth: "AuthProvider"
    notifier: Notifier
    policy: AccessPolicy
    rng: random.Random = field(default_factory=random.Random)
    today: Callable[[], dt.date] = utc_today  # quota window (UTC calendar day)

    @property
    def store_configured(self) -> bool:
        return self.database is not None

    async def close(self) -> None:
        if self.database is not None:
            await self.database.dispose()
        if self.redis is not None:
            await self.redis.aclose()


def build_context(
    settings: Settings,
    *,
    database: Database | None = None,
    redis: Redis | None = None,
    notifier: Notifier | None = None,
    rng: random.Random | None = None,
) -> AppContext:
    from creator_toolkit.security import AnonymousOnlyAuthProvider, SessionAuthProvider

    database = database if database is not None else build_database(settings.database_url)
    redis = redis if redis is not None else create_redis(settings.redis_url)

    if database is None:
        log.warning("degraded_mode", extra={"component": "store", "mode": "anonymous_only"})
    if redis is None:
        log.warning("degraded_mode", extra={"component": "sessions", "mode": "anonymous_only"})
        auth: AuthProvider = AnonymousOnlyAuthProvider()
    else:
        auth = SessionAuthProvider(redis, settings.session_ttl_seconds)
    if not settings.notify_webhook_url and notifier is None:
        log.info("notifications_disabled")

    return AppContext(
        settings=settings,
        database=database,
        redis=redis,
        auth=auth,
        notifier=notifier or Notifier(settings.notify_webhook_url, settings.notify_timeout_seconds),
        policy=AccessPolicy(settings.free_daily_limit),
        rng=rng or random.Random(),
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx


async def get_db(ctx: AppContext = Depends(get_context)) -> AsyncIterator[AsyncSession]:
    if ctx.database is None:
        raise StoreUnavailable("Storage is not configured", {"mode": "anonymous_only"})
    async with ctx.database.sessionmaker() as s:
        yield s
