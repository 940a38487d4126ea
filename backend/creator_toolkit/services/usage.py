from __future__ import annotations

import datetime as dt

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.db import insert_ignore
from creator_toolkit.errors import StoreUnavailable
from creator_toolkit.models import UsageDaily


async def _count(db: AsyncSession, user_id: str, day: dt.date) -> int:
    row = await db.execute(
        select(UsageDaily.generate_count).where(UsageDaily.user_id == user_id, UsageDaily.date == day)
    )
    return int(row.scalar_one_or_none() or 0)


async def get_count(db: AsyncSession, user_id: str, day: dt.date) -> int:
    try:
        return await _count(db, user_id, day)
    except SQLAlchemyError as e:
        raise StoreUnavailable(detail={"step": "usage_read"}) from e


async def try_consume(
    db: AsyncSession,
    user_id: str,
    day: dt.date,
    limit: int | None,
    plan: str = "free",
) -> tuple[bool, int]:
    """Charge one generation to (user_id, day) unless the count already reached ``limit``.

    Returns ``(admitted, pre_increment_count)``. The check and the increment are
    one conditional UPDATE, so concurrent callers can never both take the last
    slot. ``limit=None`` always admits. Commits on return.
    """
    try:
        await db.execute(
            insert_ignore(
                db,
                UsageDaily,
                {"user_id": user_id, "date": day, "generate_count": 0, "plan_at_time": plan},
                ["user_id", "date"],
            )
        )
        cond = [UsageDaily.user_id == user_id, UsageDaily.date == day]
        if limit is not None:
            cond.append(UsageDaily.generate_count < limit)
        res = await db.execute(
            update(UsageDaily)
            .where(*cond)
            .values(generate_count=UsageDaily.generate_count + 1, plan_at_time=plan)
            .execution_options(synchronize_session=False)
        )
        admitted = res.rowcount == 1
        count = await _count(db, user_id, day)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreUnavailable(detail={"step": "usage_increment"}) from e

    return admitted, (count - 1 if admitted else count)


async def increment(db: AsyncSession, user_id: str, day: dt.date, plan: str = "free") -> int:
    _, pre = await try_consume(db, user_id, day, None, plan)
    return pre + 1
