from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from creator_toolkit.errors import QuotaExceeded
from creator_toolkit.services import usage

log = logging.getLogger(__name__)

PLANS = ("free", "pro")
UNLIMITED = "unlimited"


@dataclass(frozen=True)
class Decision:
    admitted: bool
    used: int
    remaining: int | str  # int or UNLIMITED


class AccessPolicy:
    def __init__(self, free_daily_limit: int = 3):
        self.free_daily_limit = free_daily_limit

    def limit_for(self, plan: str) -> int | None:
        return None if plan == "pro" else self.free_daily_limit

    def remaining(self, plan: str, used: int) -> int | str:
        limit = self.limit_for(plan)
        if limit is None:
            return UNLIMITED
        return max(0, limit - used)

    async def admit(self, db: AsyncSession, user_id: str, plan: str, day: dt.date) -> Decision:
        """Charge today's quota or raise ``QuotaExceeded``; the ledger is untouched on denial."""
        limit = self.limit_for(plan)
        admitted, pre = await usage.try_consume(db, user_id, day, limit, plan)
        if not admitted:
            log.info("quota_denied", extra={"user_id": user_id, "day": day.isoformat(), "used": pre})
            raise QuotaExceeded(detail={"limit": limit, "used": pre})
        if limit is None:
            return Decision(admitted=True, used=pre + 1, remaining=UNLIMITED)
        return Decision(admitted=True, used=pre + 1, remaining=limit - pre - 1)
