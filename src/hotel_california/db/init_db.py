"""
hotel_california.db.init_db

DB initialization helpers (dev/test convenience).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from hotel_california.db import models  # noqa: F401  # registers tables on Base.metadata
from hotel_california.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Production schemas are managed outside the service.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
