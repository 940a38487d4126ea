from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.context import AppContext, get_context, get_db
from creator_toolkit.errors import ValidationFailed
from creator_toolkit.schemas import HistoryResponse, MeResponse, ProfileInfo, ToolRunItem, UsageInfo
from creator_toolkit.security import Identity, require_identity
from creator_toolkit.services import history, usage
from creator_toolkit.services.access_policy import UNLIMITED
from creator_toolkit.services.profiles import ensure_profile

router = APIRouter()


def _iso(v) -> str | None:
    return v.isoformat() if v else None


@router.get("/me", response_model=MeResponse)
async def me(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    profile, _ = await ensure_profile(db, identity.user_id, identity.email)
    day = ctx.today()
    used = await usage.get_count(db, identity.user_id, day)
    limit = ctx.policy.limit_for(profile.plan)
    return MeResponse(
        profile=ProfileInfo(
            userId=profile.user_id,
            email=profile.email,
            plan=profile.plan,
            createdAt=_iso(profile.created_at),
        ),
        usage=UsageInfo(
            date=day.isoformat(),
            used=used,
            limit=UNLIMITED if limit is None else limit,
            remainingUses=ctx.policy.remaining(profile.plan, used),
        ),
    )


@router.get("/me/history", response_model=HistoryResponse)
async def my_history(
    limit: int | None = Query(default=None),
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    n = ctx.settings.history_default_limit if limit is None else limit
    if not 1 <= n <= ctx.settings.history_max_limit:
        raise ValidationFailed("limit out of range", {"min": 1, "max": ctx.settings.history_max_limit})

    runs = await history.list_runs(db, identity.user_id, n)
    return HistoryResponse(
        runs=[
            ToolRunItem(id=r.id, toolSlug=r.tool_slug, input=r.input, output=r.output, createdAt=_iso(r.created_at))
            for r in runs
        ]
    )
