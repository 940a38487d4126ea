from __future__ import annotations

import asyncio

from creator_toolkit.config import settings
from creator_toolkit.db import build_database


async def main():
    db = build_database(settings.database_url)
    if db is None:
        raise SystemExit("DATABASE_URL is empty; nothing to initialise")
    try:
        await db.create_all()
    finally:
        await db.dispose()


if __name__ == "__main__":
    asyncio.run(main())
