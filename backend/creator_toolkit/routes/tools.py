from __future__ import annotations

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Header, Request

from creator_toolkit.context import AppContext, get_context
from creator_toolkit.schemas import ErrorEnvelope, GenerateResponse, ToolListResponse
from creator_toolkit.security import get_identity
from creator_toolkit.services import orchestrator
from creator_toolkit.tools import TOOLS, get_runnable_tool, get_tool

router = APIRouter()


@router.get("/tools", response_model=ToolListResponse)
async def list_tools():
    return ToolListResponse(tools=[t.to_dict() for t in TOOLS.values()])


@router.get("/tools/{slug}")
async def describe_tool(slug: str):
    return get_tool(slug).to_dict()


@router.post(
    "/tools/{slug}",
    response_model=GenerateResponse,
    responses={status: {"model": ErrorEnvelope} for status in (400, 404, 409, 429, 503)},
)
async def generate(
    slug: str,
    request: Request,
    background: BackgroundTasks,
    payload: dict[str, Any] = Body(...),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    ctx: AppContext = Depends(get_context),
):
    tool = get_runnable_tool(slug)

    identity = await get_identity(request, ctx)
    result = await orchestrator.generate(ctx, tool, payload, identity, idempotency_key)

    background.add_task(ctx.notifier.tool_used, result.tool_slug, result.user_id)
    return GenerateResponse(output=result.output, remainingUses=result.remaining_uses, saved=result.saved)
