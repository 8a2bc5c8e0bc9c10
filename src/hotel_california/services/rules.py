"""
hotel_california.services.rules

Pure reservation business rules.

Responsibilities:
- Accommodation whitelisting and calendar-date parsing/formatting.
- Temporal rules: check-in/check-out ordering and past check-in immutability.
- PNR generation.

Every rule raises an `APIError` on violation and has no I/O.
"""

from __future__ import annotations

import secrets
import string
from datetime import UTC, date, datetime, time

from hotel_california import errors

ACCOMMODATIONS: frozenset[str] = frozenset({"beach", "city", "mountain"})
DATE_FORMAT = "%Y-%m-%d"
PNR_LENGTH = 8
PNR_ALPHABET = string.ascii_letters + string.digits


def validate_accommodation(accommodation: str) -> str:
    if accommodation not in ACCOMMODATIONS:
        raise errors.invalid_accommodation(accommodation)
    return accommodation


def parse_date(value: str) -> date:
    # strptime alone accepts "2024-1-5"; the calendar format is strictly zero-padded.
    if len(value) != 10:
        raise errors.date_parse_error(value)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise errors.date_parse_error(value, cause=e) from e


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def ensure_date_order(check_in: date, check_out: date) -> None:
    # Same-day stays are valid.
    if check_in > check_out:
        raise errors.check_in_after_checkout()


def ensure_check_in_mutable(stored_check_in: date, now: datetime) -> None:
    """
    Reject changes once the stored check-in date has begun (midnight UTC).
    """

    starts_at = datetime.combine(stored_check_in, time.min, tzinfo=UTC)
    if now > starts_at:
        raise errors.could_not_change_reservation_check_in_date()


def generate_pnr(length: int = PNR_LENGTH) -> str:
    return "".join(secrets.choice(PNR_ALPHABET) for _ in range(length))


def display_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


# --- Module Notes -----------------------------------------------------------
# PNRs are not checked against existing codes here; the storage layer holds a
# unique constraint and a collision fails the create.
