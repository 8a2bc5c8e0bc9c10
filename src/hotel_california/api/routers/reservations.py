"""
hotel_california.api.routers.reservations

Authenticated reservation endpoints.

Responsibilities:
- Create and update reservations owned by the caller.
- Look up one reservation by PNR, or list all of the caller's reservations.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from hotel_california.api.deps import pipeline_dep
from hotel_california.api.pipeline import Operation, RequestPipeline, Services
from hotel_california.api.requests import (
    CreateReservationRequest,
    FindReservationRequest,
    FindReservationsRequest,
    UpdateReservationRequest,
    decode_create_reservation,
    decode_find_reservation,
    decode_find_reservations,
    decode_update_reservation,
)
from hotel_california.auth.models import Principal

router = APIRouter(prefix="/v1", tags=["reservations"])


async def _create(
    services: Services, req: CreateReservationRequest, principal: Principal
) -> dict[str, Any]:
    pnr = await services.reservations.create_reservation(
        principal=principal,
        destination=req.destination,
        accommodation=req.accommodation,
        check_in=req.check_in_date,
        check_out=req.check_out_date,
        guest_count=req.guest_count,
    )
    return {"isSuccessfully": True, "pnr": pnr}


async def _update(
    services: Services, req: UpdateReservationRequest, principal: Principal
) -> dict[str, Any]:
    await services.reservations.update_reservation(
        principal=principal,
        pnr=req.pnr,
        destination=req.destination,
        accommodation=req.accommodation,
        check_in=req.check_in_date,
        check_out=req.check_out_date,
        guest_count=req.guest_count,
    )
    return {"isSuccessfully": True}


async def _find(
    services: Services, req: FindReservationRequest, principal: Principal
) -> dict[str, Any]:
    view = await services.reservations.find_reservation(principal=principal, pnr=req.pnr)
    return view.to_dict()


async def _find_all(
    services: Services, req: FindReservationsRequest, principal: Principal
) -> dict[str, Any]:
    views = await services.reservations.find_reservations(principal=principal)
    return {"reservations": [v.to_dict() for v in views], "isSuccessfully": True}


CREATE_RESERVATION = Operation(
    name="CreateReservation", decode=decode_create_reservation, execute=_create
)
UPDATE_RESERVATION = Operation(
    name="UpdateReservation", decode=decode_update_reservation, execute=_update
)
FIND_RESERVATION = Operation(name="FindReservation", decode=decode_find_reservation, execute=_find)
FIND_RESERVATIONS = Operation(
    name="FindReservations", decode=decode_find_reservations, execute=_find_all
)


@router.post("/reservation/new")
async def create_reservation(
    request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)
) -> Response:
    return await pipeline.handle(request, CREATE_RESERVATION)


@router.post("/reservation/update")
async def update_reservation(
    request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)
) -> Response:
    return await pipeline.handle(request, UPDATE_RESERVATION)


@router.get("/reservation")
async def find_reservation(
    request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)
) -> Response:
    return await pipeline.handle(request, FIND_RESERVATION)


@router.get("/reservations")
async def find_reservations(
    request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)
) -> Response:
    return await pipeline.handle(request, FIND_RESERVATIONS)


# --- Module Notes -----------------------------------------------------------
# Auth is applied by the pipeline (`Operation.authenticated` defaults to True),
# so these handlers never see an unauthenticated request.
