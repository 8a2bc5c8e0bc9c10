"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build the app against a throwaway SQLite file and run its lifespan.
- Provide an HTTP client, a registered user and a signed-in token.
- Provide an in-memory persistence gateway for service-level tests.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import pytest_asyncio

from hotel_california.api.app import create_app
from hotel_california.db.gateway import (
    ReservationChanges,
    ReservationCheck,
    ReservationNotFoundError,
    StorageError,
    UserExistsError,
    UserNotFoundError,
)
from hotel_california.db.models import Reservation, User
from hotel_california.settings import Settings

JWT_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=JWT_SECRET,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings):
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def register(client: httpx.AsyncClient):
    async def _register(**overrides: Any) -> dict[str, Any]:
        body = {"firstName": "John", "lastName": "Doe", "userName": "jdoe", "password": "secret"}
        body.update(overrides)
        r = await client.post("/v1/dev/users", json=body)
        assert r.status_code == 200, r.text
        return body

    return _register


@pytest.fixture
def sign_in(client: httpx.AsyncClient):
    async def _sign_in(user_name: str, password: str) -> str:
        r = await client.post(
            "/v1/account/sign-in", json={"userName": user_name, "password": password}
        )
        assert r.status_code == 200, r.text
        return r.json()["data"]["token"]

    return _sign_in


@pytest_asyncio.fixture
async def user(register) -> dict[str, Any]:
    return await register()


@pytest_asyncio.fixture
async def token(sign_in, user) -> str:
    return await sign_in(user["userName"], user["password"])


class InMemoryGateway:
    """
    Dict-backed stand-in for `SqlGateway` with the same error behavior.
    """

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self.reservations: dict[str, Reservation] = {}
        self.fail_writes = False
        self.writes = 0

    def add_user(self, user_id: int, first_name: str, last_name: str, username: str, digest: str) -> User:
        user = User(
            id=user_id,
            first_name=first_name,
            last_name=last_name,
            username=username,
            password=digest,
            is_active=True,
            is_deleted=False,
        )
        self.users[user_id] = user
        return user

    async def sign_in(self, username: str, password_digest: str) -> User:
        for user in self.users.values():
            if (
                user.username == username
                and user.password == password_digest
                and user.is_active
                and not user.is_deleted
            ):
                return user
        raise UserNotFoundError("user not found")

    async def create_user(
        self, *, first_name: str, last_name: str, username: str, password_digest: str
    ) -> User:
        if any(u.username == username for u in self.users.values()):
            raise UserExistsError("user name is already taken")
        return self.add_user(len(self.users) + 1, first_name, last_name, username, password_digest)

    async def create_reservation(self, reservation: Reservation) -> None:
        if self.fail_writes or reservation.pnr in self.reservations:
            raise StorageError("could not store reservation")
        reservation.user = self.users[reservation.user_id]
        self.reservations[reservation.pnr] = reservation
        self.writes += 1

    async def update_reservation(
        self,
        *,
        pnr: str,
        user_id: int,
        changes: ReservationChanges,
        check: ReservationCheck,
    ) -> None:
        stored = self._owned(pnr, user_id)
        check(stored)
        if self.fail_writes:
            raise StorageError("could not update reservation")
        stored.destination = changes.destination
        stored.accommodation = changes.accommodation
        stored.check_in_date = changes.check_in_date
        stored.check_out_date = changes.check_out_date
        stored.guest_count = changes.guest_count
        self.writes += 1

    async def find_reservation(self, pnr: str, user_id: int) -> Reservation:
        return self._owned(pnr, user_id)

    async def find_reservations(self, user_id: int) -> list[Reservation]:
        return [r for r in self.reservations.values() if r.user_id == user_id]

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None

    def _owned(self, pnr: str, user_id: int) -> Reservation:
        stored = self.reservations.get(pnr)
        if stored is None or stored.user_id != user_id:
            raise ReservationNotFoundError("reservation not found")
        return stored


@pytest.fixture
def gateway() -> InMemoryGateway:
    gw = InMemoryGateway()
    gw.add_user(1, "John", "Doe", "jdoe", "5ebe2294ecd0e0f08eab7690d2a6ee69")
    gw.add_user(2, "Jane", "Roe", "jroe", "5ebe2294ecd0e0f08eab7690d2a6ee69")
    return gw


# --- Module Notes -----------------------------------------------------------
# "5ebe2294ecd0e0f08eab7690d2a6ee69" is the MD5 hex digest of "secret".
