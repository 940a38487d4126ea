from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.errors import BestEffortFailure, StoreUnavailable
from creator_toolkit.models import ToolRun


async def record_run(db: AsyncSession, user_id: str, tool_slug: str, data: dict, output: dict) -> ToolRun:
    run = ToolRun(user_id=user_id, tool_slug=tool_slug, input=data, output=output)
    try:
        db.add(run)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise BestEffortFailure("history write failed", {"tool": tool_slug}) from e
    return run


async def list_runs(db: AsyncSession, user_id: str, limit: int = 10) -> list[ToolRun]:
    try:
        rows = await db.execute(
            select(ToolRun)
            .where(ToolRun.user_id == user_id)
            .order_by(ToolRun.created_at.desc(), ToolRun.id.desc())
            .limit(limit)
        )
    except SQLAlchemyError as e:
        raise StoreUnavailable(detail={"step": "history_read"}) from e
    return list(rows.scalars())
