"""Runs one tool request end to end: validate, meter, generate, record.

Ordering matters. Validation and the quota decision happen before the
generator runs, so a rejected request never costs engine work. Once the ledger
has been charged the charge stands even if anything after it fails; there is
no compensating decrement. The history write is best-effort.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from redis.exceptions import RedisError

from creator_toolkit.context import AppContext
from creator_toolkit.errors import BestEffortFailure, DuplicateRequest, QuotaExceeded, StoreUnavailable
from creator_toolkit.security import Identity
from creator_toolkit.services import history, idempotency
from creator_toolkit.services.profiles import ensure_profile
from creator_toolkit.tools import ToolDefinition, run_tool, validate_input

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    tool_slug: str
    output: dict
    remaining_uses: int | str | None
    saved: bool
    user_id: str | None = None
    run_id: str | None = None


async def _claim(ctx: AppContext, identity: Identity, key: str | None) -> bool:
    if not key or ctx.redis is None:
        return False
    try:
        ok = await idempotency.acquire(ctx.redis, identity.user_id, key, ctx.settings.idempotency_ttl_seconds)
    except RedisError as e:
        raise StoreUnavailable(detail={"step": "idempotency"}) from e
    if not ok:
        raise DuplicateRequest(detail={"idempotency_key": key})
    return True


async def _unclaim(ctx: AppContext, identity: Identity, key: str) -> None:
    try:
        await idempotency.release(ctx.redis, identity.user_id, key)
    except RedisError:
        log.warning("idempotency_release_failed", extra={"user_id": identity.user_id})


async def generate(
    ctx: AppContext,
    tool: ToolDefinition,
    data: Mapping[str, Any],
    identity: Identity | None,
    idempotency_key: str | None = None,
) -> GenerationResult:
    validate_input(tool, data)

    if identity is None or ctx.database is None:
        if identity is not None:
            log.warning("unmetered_generation", extra={"tool": tool.slug, "user_id": identity.user_id, "mode": "anonymous_only"})
        output = run_tool(tool, data, ctx.rng)
        log.info("tool_generated", extra={"tool": tool.slug, "user_id": None})
        return GenerationResult(tool_slug=tool.slug, output=output, remaining_uses=None, saved=False)

    claimed = await _claim(ctx, identity, idempotency_key)
    try:
        async with ctx.database.sessionmaker() as db:
            profile, _ = await ensure_profile(db, identity.user_id, identity.email)
            decision = await ctx.policy.admit(db, identity.user_id, profile.plan, ctx.today())
    except (QuotaExceeded, StoreUnavailable):
        if claimed:
            await _unclaim(ctx, identity, idempotency_key)
        raise

    output = run_tool(tool, data, ctx.rng)
    log.info("tool_generated", extra={"tool": tool.slug, "user_id": identity.user_id, "used": decision.used})

    run_id = None
    try:
        async with ctx.database.sessionmaker() as db:
            run = await history.record_run(db, identity.user_id, tool.slug, dict(data), output)
            run_id = run.id
    except BestEffortFailure:
        log.warning("history_write_failed", exc_info=True, extra={"tool": tool.slug, "user_id": identity.user_id})

    return GenerationResult(
        tool_slug=tool.slug,
        output=output,
        remaining_uses=decision.remaining,
        saved=run_id is not None,
        user_id=identity.user_id,
        run_id=run_id,
    )
