"""
hotel_california.api.requests

Wire decoding and validation for every endpoint.

Responsibilities:
- Read headers, query parameters and an optional JSON body into a `WireRequest`.
- Map wire fields to typed request models with one explicit function per endpoint.
- Validate fail-fast: the first failing field becomes a `ValidationError`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from hotel_california import errors

TOKEN_HEADER = "token"
LANGUAGE_HEADER = "accept-language"


class MalformedBodyError(Exception):
    message_key = "malformed-request-body"


@dataclass(frozen=True, slots=True)
class WireRequest:
    headers: Mapping[str, str]
    query: Mapping[str, str]
    body: Mapping[str, Any]

    @classmethod
    async def read(cls, request: Request) -> WireRequest:
        raw = await request.body()
        body: dict[str, Any] = {}
        if raw.strip():
            try:
                parsed = json.loads(raw)
            except ValueError as e:
                raise errors.bad_request_error(
                    MalformedBodyError("decoding request body failed")
                ) from e
            if not isinstance(parsed, dict):
                raise errors.bad_request_error(
                    MalformedBodyError("decoding request body failed, expected an object")
                )
            body = parsed
        return cls(headers=request.headers, query=request.query_params, body=body)


def _pick(source: Mapping[str, Any], names: Iterable[str]) -> dict[str, Any]:
    # Absent and null fields are both left out so they report as "required".
    return {name: source[name] for name in names if name in source and source[name] is not None}


# --- request models ---------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class _AuthenticatedRequest(_WireModel):
    # Presence is enforced by the auth guard, not by validation.
    token: str | None = None


class HealthRequest(_WireModel):
    pass


class SignInRequest(_WireModel):
    user_name: str = Field(alias="userName", min_length=1, strict=True)
    password: str = Field(min_length=1, strict=True)


class RegisterUserRequest(_WireModel):
    first_name: str = Field(alias="firstName", min_length=1, max_length=128, strict=True)
    last_name: str = Field(alias="lastName", min_length=1, max_length=128, strict=True)
    user_name: str = Field(alias="userName", min_length=1, max_length=128, strict=True)
    password: str = Field(min_length=1, strict=True)


class CreateReservationRequest(_AuthenticatedRequest):
    destination: str = Field(min_length=1, max_length=256, strict=True)
    check_in_date: str = Field(alias="checkInDate", min_length=1, strict=True)
    check_out_date: str = Field(alias="checkOutDate", min_length=1, strict=True)
    accommodation: str = Field(min_length=1, strict=True)
    guest_count: int = Field(alias="guestCount", ge=1, strict=True)


class UpdateReservationRequest(_AuthenticatedRequest):
    pnr: str = Field(min_length=1, strict=True)
    destination: str = Field(min_length=1, max_length=256, strict=True)
    check_in_date: str = Field(alias="checkInDate", min_length=1, strict=True)
    check_out_date: str = Field(alias="checkOutDate", min_length=1, strict=True)
    accommodation: str = Field(min_length=1, strict=True)
    guest_count: int = Field(alias="guestCount", ge=1, strict=True)


class FindReservationRequest(_AuthenticatedRequest):
    pnr: str = Field(min_length=1)


class FindReservationsRequest(_AuthenticatedRequest):
    pass


# --- per-endpoint decoders --------------------------------------------------

_RESERVATION_BODY_FIELDS = (
    "destination",
    "checkInDate",
    "checkOutDate",
    "accommodation",
    "guestCount",
)


def decode_health(wire: WireRequest) -> HealthRequest:
    return validate(HealthRequest, {})


def decode_sign_in(wire: WireRequest) -> SignInRequest:
    return validate(SignInRequest, _pick(wire.body, ("userName", "password")))


def decode_register_user(wire: WireRequest) -> RegisterUserRequest:
    return validate(
        RegisterUserRequest,
        _pick(wire.body, ("firstName", "lastName", "userName", "password")),
    )


def decode_create_reservation(wire: WireRequest) -> CreateReservationRequest:
    return validate(
        CreateReservationRequest,
        {**_pick(wire.headers, (TOKEN_HEADER,)), **_pick(wire.body, _RESERVATION_BODY_FIELDS)},
    )


def decode_update_reservation(wire: WireRequest) -> UpdateReservationRequest:
    return validate(
        UpdateReservationRequest,
        {
            **_pick(wire.headers, (TOKEN_HEADER,)),
            **_pick(wire.body, ("pnr", *_RESERVATION_BODY_FIELDS)),
        },
    )


def decode_find_reservation(wire: WireRequest) -> FindReservationRequest:
    return validate(
        FindReservationRequest,
        {**_pick(wire.headers, (TOKEN_HEADER,)), **_pick(wire.query, ("pnr",))},
    )


def decode_find_reservations(wire: WireRequest) -> FindReservationsRequest:
    return validate(FindReservationsRequest, _pick(wire.headers, (TOKEN_HEADER,)))


# --- validation -------------------------------------------------------------

M = TypeVar("M", bound=BaseModel)

_CONSTRAINT_TAGS = {
    "missing": "required",
    "string_too_short": "required",
    "string_too_long": "max",
    "greater_than_equal": "min",
}


def validate(model: type[M], data: Mapping[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        constraint = _CONSTRAINT_TAGS.get(first["type"])
        if constraint is None:
            constraint = "type" if first["type"].endswith("_type") else first["type"]
        raise errors.validation_error(field=field, constraint=constraint, cause=e) from e


# --- Module Notes -----------------------------------------------------------
# Field order on each model is the order validation reports failures in.
