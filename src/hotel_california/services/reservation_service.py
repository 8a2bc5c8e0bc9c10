"""
hotel_california.services.reservation_service

Reservation use cases.

Responsibilities:
- Create, update, and look up reservations for an authenticated principal.
- Apply the business rules before any write and map gateway failures to API errors.
- Build denormalized reservation views (owner display name, formatted dates).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from hotel_california import errors
from hotel_california.auth.models import Principal
from hotel_california.db.gateway import GatewayError, PersistenceGateway, ReservationChanges
from hotel_california.db.models import Reservation
from hotel_california.observability.logging import get_logger
from hotel_california.services import rules

log = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True, slots=True)
class ReservationView:
    pnr: str
    destination: str
    check_in_date: str
    check_out_date: str
    accommodation: str
    guest_count: int
    user_name: str

    @classmethod
    def from_model(cls, reservation: Reservation) -> ReservationView:
        owner = reservation.user
        return cls(
            pnr=reservation.pnr,
            destination=reservation.destination,
            check_in_date=rules.format_date(reservation.check_in_date),
            check_out_date=rules.format_date(reservation.check_out_date),
            accommodation=reservation.accommodation,
            guest_count=reservation.guest_count,
            user_name=rules.display_name(owner.first_name, owner.last_name),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "pnr": self.pnr,
            "destination": self.destination,
            "checkInDate": self.check_in_date,
            "checkOutDate": self.check_out_date,
            "accommodation": self.accommodation,
            "guestCount": self.guest_count,
            "userName": self.user_name,
        }


class ReservationService:
    def __init__(
        self,
        *,
        gateway: PersistenceGateway,
        clock: Callable[[], datetime] = _utcnow,
        pnr_factory: Callable[[], str] = rules.generate_pnr,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self._pnr_factory = pnr_factory

    async def create_reservation(
        self,
        *,
        principal: Principal,
        destination: str,
        accommodation: str,
        check_in: str,
        check_out: str,
        guest_count: int,
    ) -> str:
        rules.validate_accommodation(accommodation)
        check_in_date = rules.parse_date(check_in)
        check_out_date = rules.parse_date(check_out)
        rules.ensure_date_order(check_in_date, check_out_date)

        pnr = self._pnr_factory()
        reservation = Reservation(
            user_id=principal.id,
            pnr=pnr,
            destination=destination,
            accommodation=accommodation,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            guest_count=guest_count,
            created_at=self._clock().replace(tzinfo=None),
            is_active=True,
            is_deleted=False,
        )

        try:
            await self._gateway.create_reservation(reservation)
        except GatewayError as e:
            log.error(
                "reservation_create_failed",
                method="CreateReservation",
                action="gateway.create_reservation",
                user_id=principal.id,
                error=str(e),
                cause=repr(e.__cause__),
            )
            raise errors.could_not_create_reservation(cause=e) from e

        log.info("reservation_created", user_id=principal.id, pnr=pnr)
        return pnr

    async def update_reservation(
        self,
        *,
        principal: Principal,
        pnr: str,
        destination: str,
        accommodation: str,
        check_in: str,
        check_out: str,
        guest_count: int,
    ) -> None:
        rules.validate_accommodation(accommodation)
        check_in_date = rules.parse_date(check_in)
        check_out_date = rules.parse_date(check_out)

        now = self._clock()

        def check(stored: Reservation) -> None:
            # Runs against the locked row: the stored check-in decides mutability,
            # not the proposed one.
            rules.ensure_check_in_mutable(stored.check_in_date, now)
            rules.ensure_date_order(check_in_date, check_out_date)

        changes = ReservationChanges(
            destination=destination,
            accommodation=accommodation,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            guest_count=guest_count,
        )

        try:
            await self._gateway.update_reservation(
                pnr=pnr, user_id=principal.id, changes=changes, check=check
            )
        except GatewayError as e:
            log.error(
                "reservation_update_failed",
                method="UpdateReservation",
                action="gateway.update_reservation",
                user_id=principal.id,
                pnr=pnr,
                error=str(e),
            )
            raise errors.bad_request_error(e) from e

        log.info("reservation_updated", user_id=principal.id, pnr=pnr)

    async def find_reservation(self, *, principal: Principal, pnr: str) -> ReservationView:
        try:
            reservation = await self._gateway.find_reservation(pnr, principal.id)
        except GatewayError as e:
            log.error(
                "reservation_lookup_failed",
                method="FindReservation",
                action="gateway.find_reservation",
                user_id=principal.id,
                pnr=pnr,
                error=str(e),
            )
            raise errors.bad_request_error(e) from e
        return ReservationView.from_model(reservation)

    async def find_reservations(self, *, principal: Principal) -> list[ReservationView]:
        try:
            reservations = await self._gateway.find_reservations(principal.id)
        except GatewayError as e:
            log.error(
                "reservation_list_failed",
                method="FindReservations",
                action="gateway.find_reservations",
                user_id=principal.id,
                error=str(e),
            )
            raise errors.bad_request_error(e) from e
        return [ReservationView.from_model(r) for r in reservations]


# --- Module Notes -----------------------------------------------------------
# Validation failures raise before the gateway is called, so they never write.
