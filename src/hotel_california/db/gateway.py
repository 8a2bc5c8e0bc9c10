"""
hotel_california.db.gateway

Persistence gateway: the narrow read/write contract the services depend on.

Responsibilities:
- Define the `PersistenceGateway` protocol and its error types.
- Implement it on SQLAlchemy async sessions (`SqlGateway`), one session per call.
- Run the reservation update as a single read-check-write transaction.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Protocol

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hotel_california.db.models import Reservation, User
from hotel_california.db.repositories.reservations import ReservationRepo
from hotel_california.db.repositories.users import UserRepo


class GatewayError(Exception):
    """
    Base for persistence failures. Messages are safe to show to callers;
    driver errors are chained as `__cause__` instead.
    """

    message_key: ClassVar[str | None] = "storage-error"


class UserNotFoundError(GatewayError):
    message_key = "user-not-found"


class UserExistsError(GatewayError):
    message_key = "user-already-exists"


class ReservationNotFoundError(GatewayError):
    message_key = "reservation-not-found"


class StorageError(GatewayError):
    message_key = "storage-error"


@dataclass(frozen=True, slots=True)
class ReservationChanges:
    destination: str
    accommodation: str
    check_in_date: date
    check_out_date: date
    guest_count: int


# Called with the stored row inside the update transaction; raising aborts the write.
ReservationCheck = Callable[[Reservation], None]


class PersistenceGateway(Protocol):
    async def sign_in(self, username: str, password_digest: str) -> User: ...

    async def create_user(
        self, *, first_name: str, last_name: str, username: str, password_digest: str
    ) -> User: ...

    async def create_reservation(self, reservation: Reservation) -> None: ...

    async def update_reservation(
        self,
        *,
        pnr: str,
        user_id: int,
        changes: ReservationChanges,
        check: ReservationCheck,
    ) -> None: ...

    async def find_reservation(self, pnr: str, user_id: int) -> Reservation: ...

    async def find_reservations(self, user_id: int) -> list[Reservation]: ...

    async def ping(self) -> None: ...

    async def close(self) -> None: ...


class SqlGateway:
    def __init__(
        self, *, engine: AsyncEngine, sessionmaker: async_sessionmaker[AsyncSession]
    ) -> None:
        self._engine = engine
        self._sessions = sessionmaker

    async def sign_in(self, username: str, password_digest: str) -> User:
        try:
            async with self._sessions() as session:
                user = await UserRepo(session).get_active_by_credentials(
                    username=username, password_digest=password_digest
                )
        except SQLAlchemyError as e:
            raise StorageError("could not read user") from e
        if user is None:
            raise UserNotFoundError("user not found")
        return user

    async def create_user(
        self, *, first_name: str, last_name: str, username: str, password_digest: str
    ) -> User:
        try:
            async with self._sessions() as session, session.begin():
                return await UserRepo(session).create(
                    first_name=first_name,
                    last_name=last_name,
                    username=username,
                    password_digest=password_digest,
                )
        except IntegrityError as e:
            raise UserExistsError("user name is already taken") from e
        except SQLAlchemyError as e:
            raise StorageError("could not store user") from e

    async def create_reservation(self, reservation: Reservation) -> None:
        try:
            async with self._sessions() as session, session.begin():
                await ReservationRepo(session).add(reservation)
        except SQLAlchemyError as e:
            # Includes PNR uniqueness violations; callers do not retry.
            raise StorageError("could not store reservation") from e

    async def update_reservation(
        self,
        *,
        pnr: str,
        user_id: int,
        changes: ReservationChanges,
        check: ReservationCheck,
    ) -> None:
        try:
            # session.begin() commits on success and rolls back on any exception,
            # including those raised by `check`.
            async with self._sessions() as session, session.begin():
                stored = await ReservationRepo(session).get_owned(
                    pnr=pnr, user_id=user_id, for_update=True
                )
                if stored is None:
                    raise ReservationNotFoundError("reservation not found")

                check(stored)

                stored.destination = changes.destination
                stored.accommodation = changes.accommodation
                stored.check_in_date = changes.check_in_date
                stored.check_out_date = changes.check_out_date
                stored.guest_count = changes.guest_count
        except SQLAlchemyError as e:
            raise StorageError("could not update reservation") from e

    async def find_reservation(self, pnr: str, user_id: int) -> Reservation:
        try:
            async with self._sessions() as session:
                reservation = await ReservationRepo(session).get_owned(pnr=pnr, user_id=user_id)
        except SQLAlchemyError as e:
            raise StorageError("could not read reservation") from e
        if reservation is None:
            raise ReservationNotFoundError("reservation not found")
        return reservation

    async def find_reservations(self, user_id: int) -> list[Reservation]:
        try:
            async with self._sessions() as session:
                return await ReservationRepo(session).list_owned(user_id=user_id)
        except SQLAlchemyError as e:
            raise StorageError("could not read reservations") from e

    async def ping(self) -> None:
        try:
            async with self._sessions() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError("database is not reachable") from e

    async def close(self) -> None:
        # Dispose the engine to close pools/FDs gracefully.
        await self._engine.dispose()


# --- Module Notes -----------------------------------------------------------
# Services only see `PersistenceGateway`; tests substitute an in-memory fake.
