from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.context import AppContext, get_context, get_db
from creator_toolkit.errors import err
from creator_toolkit.schemas import PostSignupRequest, PostSignupResponse, UpdatePlanRequest, UpdatePlanResponse
from creator_toolkit.security import Identity, require_identity
from creator_toolkit.services.access_policy import PLANS
from creator_toolkit.services.profiles import change_plan, ensure_profile

log = logging.getLogger(__name__)

router = APIRouter()


@router.post("/auth/post-signup", response_model=PostSignupResponse)
async def post_signup(
    req: PostSignupRequest,
    background: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    if not req.userId or not req.email:
        raise err("VALIDATION_FAILED", "Missing userId or email", {"fields": ["userId", "email"]})

    # already-provisioned profiles (e.g. created lazily by a first generation) count as success
    _, created = await ensure_profile(db, req.userId, req.email)
    if created:
        log.info("profile_created", extra={"user_id": req.userId})
        background.add_task(ctx.notifier.user_signed_up, req.userId, req.email)
    return PostSignupResponse(success=True, created=created)


@router.post("/auth/update-plan", response_model=UpdatePlanResponse)
async def update_plan(
    req: UpdatePlanRequest,
    background: BackgroundTasks,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    if req.plan not in PLANS:
        raise err("VALIDATION_FAILED", "Invalid plan", {"plan": req.plan, "allowed": list(PLANS)})

    previous = await change_plan(db, identity.user_id, req.plan, identity.email)
    log.info("plan_changed", extra={"user_id": identity.user_id, "from_plan": previous, "to_plan": req.plan})
    if req.plan == "pro" and previous != "pro":
        background.add_task(ctx.notifier.user_upgraded_pro, identity.user_id, identity.email)
    return UpdatePlanResponse(success=True, plan=req.plan)
