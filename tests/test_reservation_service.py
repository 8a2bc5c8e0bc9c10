"""
tests.test_reservation_service

Reservation rule engine over an in-memory gateway.

Responsibilities:
- Validation happens before any write.
- Update immutability is decided by the stored check-in date.
- Ownership scoping and gateway failure mapping.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from hotel_california.auth.models import Principal
from hotel_california.db.gateway import ReservationNotFoundError, StorageError
from hotel_california.errors import APIError
from hotel_california.services.reservation_service import ReservationService, ReservationView

NOW = datetime(2030, 1, 10, 9, 30, tzinfo=UTC)
JOHN = Principal(id=1)
JANE = Principal(id=2)


@pytest.fixture
def service(gateway) -> ReservationService:
    return ReservationService(gateway=gateway, clock=lambda: NOW)


async def _create(service: ReservationService, principal: Principal = JOHN, **overrides) -> str:
    fields = {
        "destination": "Istanbul",
        "accommodation": "mountain",
        "check_in": "2030-02-01",
        "check_out": "2030-02-05",
        "guest_count": 2,
    }
    fields.update(overrides)
    return await service.create_reservation(principal=principal, **fields)


async def _update(service: ReservationService, pnr: str, principal: Principal = JOHN, **overrides) -> None:
    fields = {
        "destination": "Antalya",
        "accommodation": "beach",
        "check_in": "2030-03-01",
        "check_out": "2030-03-04",
        "guest_count": 3,
    }
    fields.update(overrides)
    await service.update_reservation(principal=principal, pnr=pnr, **fields)


@pytest.mark.asyncio
async def test_create_then_find_round_trip(service, gateway) -> None:
    pnr = await _create(service)

    view = await service.find_reservation(principal=JOHN, pnr=pnr)

    assert view == ReservationView(
        pnr=pnr,
        destination="Istanbul",
        check_in_date="2030-02-01",
        check_out_date="2030-02-05",
        accommodation="mountain",
        guest_count=2,
        user_name="John Doe",
    )
    stored = gateway.reservations[pnr]
    assert stored.is_active is True
    assert stored.is_deleted is False
    assert stored.user_id == 1


@pytest.mark.asyncio
async def test_same_day_stay_is_created(service) -> None:
    pnr = await _create(service, check_in="2030-02-01", check_out="2030-02-01")
    assert len(pnr) == 8


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "name"),
    [
        ({"accommodation": "desert"}, "InvalidAccommodationError"),
        ({"check_in": "2030-13-01"}, "DateParseError"),
        ({"check_out": "02/05/2030"}, "DateParseError"),
        ({"check_in": "2030-02-06", "check_out": "2030-02-05"}, "CheckInAfterCheckoutError"),
    ],
)
async def test_create_rejects_invalid_input_without_writing(service, gateway, overrides, name) -> None:
    with pytest.raises(APIError) as exc:
        await _create(service, **overrides)
    assert exc.value.name == name
    assert gateway.writes == 0


@pytest.mark.asyncio
async def test_create_hides_gateway_failure(service, gateway) -> None:
    gateway.fail_writes = True
    with pytest.raises(APIError) as exc:
        await _create(service)
    err = exc.value
    assert err.name == "CouldNotCreateReservationError"
    assert err.code == 5
    assert isinstance(err.cause, StorageError)
    assert "store" not in err.message


@pytest.mark.asyncio
async def test_pnr_collision_fails_create_without_retry(gateway) -> None:
    service = ReservationService(gateway=gateway, clock=lambda: NOW, pnr_factory=lambda: "SAMEPNR1")
    await _create(service)
    with pytest.raises(APIError) as exc:
        await _create(service)
    assert exc.value.name == "CouldNotCreateReservationError"
    assert gateway.writes == 1


@pytest.mark.asyncio
async def test_update_changes_all_mutable_fields(service, gateway) -> None:
    pnr = await _create(service)

    await _update(service, pnr)

    stored = gateway.reservations[pnr]
    assert stored.destination == "Antalya"
    assert stored.accommodation == "beach"
    assert stored.check_in_date == date(2030, 3, 1)
    assert stored.check_out_date == date(2030, 3, 4)
    assert stored.guest_count == 3


@pytest.mark.asyncio
async def test_update_of_past_check_in_fails_regardless_of_new_dates(service, gateway) -> None:
    pnr = await _create(service, check_in="2030-01-05", check_out="2030-01-12")
    before = vars(gateway.reservations[pnr]).copy()

    for check_in, check_out in [("2031-01-01", "2031-01-02"), ("2031-01-05", "2031-01-01")]:
        with pytest.raises(APIError) as exc:
            await _update(service, pnr, check_in=check_in, check_out=check_out)
        assert exc.value.name == "CouldNotChangeReservationCheckInDateError"

    assert vars(gateway.reservations[pnr]) == before


@pytest.mark.asyncio
async def test_update_check_in_day_itself_is_already_immutable(service) -> None:
    pnr = await _create(service, check_in="2030-01-10", check_out="2030-01-12")
    with pytest.raises(APIError) as exc:
        await _update(service, pnr)
    assert exc.value.name == "CouldNotChangeReservationCheckInDateError"


@pytest.mark.asyncio
async def test_update_allows_moving_future_stay_into_the_past(service, gateway) -> None:
    # Only the stored check-in date decides mutability.
    pnr = await _create(service)
    await _update(service, pnr, check_in="2029-12-01", check_out="2029-12-02")
    assert gateway.reservations[pnr].check_in_date == date(2029, 12, 1)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "name"),
    [
        ({"accommodation": "castle"}, "InvalidAccommodationError"),
        ({"check_in": "tomorrow"}, "DateParseError"),
        ({"check_in": "2030-03-05", "check_out": "2030-03-04"}, "CheckInAfterCheckoutError"),
    ],
)
async def test_update_rejects_invalid_input_without_writing(service, gateway, overrides, name) -> None:
    pnr = await _create(service)
    with pytest.raises(APIError) as exc:
        await _update(service, pnr, **overrides)
    assert exc.value.name == name
    assert gateway.writes == 1
    assert gateway.reservations[pnr].destination == "Istanbul"


@pytest.mark.asyncio
async def test_update_of_foreign_reservation_is_not_found(service, gateway) -> None:
    pnr = await _create(service, principal=JOHN)
    before = vars(gateway.reservations[pnr]).copy()

    with pytest.raises(APIError) as exc:
        await _update(service, pnr, principal=JANE)

    assert exc.value.name == "BadRequestError"
    assert isinstance(exc.value.cause, ReservationNotFoundError)
    assert vars(gateway.reservations[pnr]) == before


@pytest.mark.asyncio
async def test_find_unknown_pnr_wraps_not_found(service) -> None:
    with pytest.raises(APIError) as exc:
        await service.find_reservation(principal=JOHN, pnr="NOPE0000")
    err = exc.value
    assert err.name == "BadRequestError"
    assert err.code == 2
    assert err.message_key == "reservation-not-found"
    assert isinstance(err.cause, ReservationNotFoundError)


@pytest.mark.asyncio
async def test_find_is_scoped_to_principal(service) -> None:
    pnr = await _create(service, principal=JOHN)
    with pytest.raises(APIError):
        await service.find_reservation(principal=JANE, pnr=pnr)


@pytest.mark.asyncio
async def test_find_reservations_lists_only_own(service) -> None:
    first = await _create(service, principal=JOHN)
    second = await _create(service, principal=JOHN, destination="Izmir", accommodation="city")
    await _create(service, principal=JANE)

    views = await service.find_reservations(principal=JOHN)

    assert {v.pnr for v in views} == {first, second}
    assert {v.user_name for v in views} == {"John Doe"}
    assert await service.find_reservations(principal=Principal(id=99)) == []
