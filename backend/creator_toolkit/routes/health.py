from __future__ import annotations

from fastapi import APIRouter, Depends

from creator_toolkit.context import AppContext, get_context

router = APIRouter()


@router.get("/health")
async def health(ctx: AppContext = Depends(get_context)):
    return {
        "ok": True,
        "store": "configured" if ctx.store_configured else "unconfigured",
        "sessions": "configured" if ctx.redis is not None else "unconfigured",
    }
