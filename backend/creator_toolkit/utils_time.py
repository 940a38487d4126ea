from __future__ import annotations

import datetime as dt


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def utc_today(now_utc: dt.datetime | None = None) -> dt.date:
    now = now_utc or utc_now()
    return now.astimezone(dt.timezone.utc).date()
