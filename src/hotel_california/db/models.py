"""
hotel_california.db.models

Persistence schema for users and reservations.

Responsibilities:
- User: credentials (password digest) and name parts.
- Reservation: PNR-identified stay owned by one user.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_california.db.base import Base


def _utcnow() -> datetime:
    # Persist naive UTC timestamps; the column type carries no timezone.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    # Fixed-length hex digest; plaintext passwords are never stored.
    password: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    reservations: Mapped[list[Reservation]] = relationship(back_populates="user")

    __table_args__ = (Index("ix_users_username_password", "username", "password"),)


class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    # PNR collisions are rejected here rather than checked before insert.
    pnr: Mapped[str] = mapped_column(String(8), nullable=False, unique=True)

    destination: Mapped[str] = mapped_column(String(256), nullable=False)
    accommodation: Mapped[str] = mapped_column(String(32), nullable=False)
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user: Mapped[User] = relationship(back_populates="reservations")

    __table_args__ = (Index("ix_reservations_pnr_user", "pnr", "user_id"),)


# --- Module Notes -----------------------------------------------------------
# `is_active`/`is_deleted` are written on creation only; soft deletion is not
# part of this service.
