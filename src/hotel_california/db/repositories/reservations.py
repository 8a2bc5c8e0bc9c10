"""
hotel_california.db.repositories.reservations

Repository for `Reservation` entities.

Responsibilities:
- Insert reservations.
- Fetch reservations scoped to their owner, with the owner eagerly loaded.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_california.db.models import Reservation


class ReservationRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, reservation: Reservation) -> Reservation:
        self._session.add(reservation)
        await self._session.flush()
        return reservation

    async def get_owned(
        self, *, pnr: str, user_id: int, for_update: bool = False
    ) -> Reservation | None:
        # Scoping by owner in the query means foreign reservations look absent.
        stmt = (
            select(Reservation)
            .where(Reservation.pnr == pnr, Reservation.user_id == user_id)
            .options(selectinload(Reservation.user))
        )
        if for_update:
            stmt = stmt.with_for_update()
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_owned(self, *, user_id: int) -> list[Reservation]:
        stmt = (
            select(Reservation)
            .where(Reservation.user_id == user_id)
            .options(selectinload(Reservation.user))
            .order_by(Reservation.created_at, Reservation.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# Row locks (`with_for_update`) are ignored by SQLite and honored by MySQL/Postgres.
