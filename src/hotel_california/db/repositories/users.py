"""
hotel_california.db.repositories.users

Repository for `User` entities.

Responsibilities:
- Insert users with a password digest.
- Look up an active, non-deleted user by username and digest.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_california.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        first_name: str,
        last_name: str,
        username: str,
        password_digest: str,
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            username=username,
            password=password_digest,
            is_active=True,
            is_deleted=False,
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def get_active_by_credentials(self, *, username: str, password_digest: str) -> User | None:
        stmt = select(User).where(
            User.username == username,
            User.password == password_digest,
            User.is_active.is_(True),
            User.is_deleted.is_(False),
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()


# --- Module Notes -----------------------------------------------------------
# Credentials are matched in the query; a wrong password and an unknown user
# look the same to callers.
