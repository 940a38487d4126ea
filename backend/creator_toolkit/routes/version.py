from __future__ import annotations

from fastapi import APIRouter, Depends

from creator_toolkit.context import AppContext, get_context

router = APIRouter()


@router.get("/version")
async def version(ctx: AppContext = Depends(get_context)):
    s = ctx.settings
    return {"app": s.app_name, "version": s.app_version, "commit": s.commit_sha, "env": s.app_env}
