from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.db import insert_ignore
from creator_toolkit.errors import StoreUnavailable
from creator_toolkit.models import Profile


async def ensure_profile(db: AsyncSession, user_id: str, email: str | None = None) -> tuple[Profile, bool]:
    """Fetch the profile, creating a free one if absent. Returns ``(profile, created)``.

    A concurrent creation of the same id is absorbed by ON CONFLICT DO NOTHING.
    """
    try:
        res = await db.execute(
            insert_ignore(db, Profile, {"user_id": user_id, "email": email, "plan": "free"}, ["user_id"])
        )
        created = res.rowcount == 1
        await db.commit()
        row = await db.execute(select(Profile).where(Profile.user_id == user_id))
        return row.scalar_one(), created
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreUnavailable(detail={"step": "profile"}) from e


async def change_plan(db: AsyncSession, user_id: str, plan: str, email: str | None = None) -> str:
    """Set the caller's plan and return the previous one."""
    profile, _ = await ensure_profile(db, user_id, email)
    previous = profile.plan
    try:
        profile.plan = plan
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreUnavailable(detail={"step": "plan_update"}) from e
    return previous
