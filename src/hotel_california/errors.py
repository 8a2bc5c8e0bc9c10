"""
hotel_california.errors

Uniform API error representation.

Responsibilities:
- Define `APIError`, the only failure shape that reaches callers.
- Provide factories for every error class the service can return.
- Keep the causing exception for diagnostics without ever serializing it.
"""

from __future__ import annotations

from typing import Any

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

# Error codes are part of the public contract; never renumber.
CODE_INTERNAL_SERVER_ERROR = 1
CODE_BAD_REQUEST_ERROR = 2
CODE_VALIDATION_ERROR = 3
CODE_UNAUTHORIZED_ERROR = 4
CODE_COULD_NOT_CREATE_RESERVATION = 5
CODE_COULD_NOT_CHANGE_RESERVATION_CHECK_IN_DATE = 6
CODE_INVALID_ACCOMMODATION = 7
CODE_DATE_PARSE_ERROR = 8
CODE_CHECK_IN_AFTER_CHECKOUT = 9

NAME_INTERNAL_SERVER_ERROR = "InternalServerError"
NAME_BAD_REQUEST_ERROR = "BadRequestError"
NAME_VALIDATION_ERROR = "ValidationError"
NAME_UNAUTHORIZED_ERROR = "UnauthorizedError"
NAME_COULD_NOT_CREATE_RESERVATION = "CouldNotCreateReservationError"
NAME_COULD_NOT_CHANGE_RESERVATION_CHECK_IN_DATE = "CouldNotChangeReservationCheckInDateError"
NAME_INVALID_ACCOMMODATION = "InvalidAccommodationError"
NAME_DATE_PARSE_ERROR = "DateParseError"
NAME_CHECK_IN_AFTER_CHECKOUT = "CheckInAfterCheckoutError"


class APIError(Exception):
    """
    Failure returned to callers instead of raw exceptions.

    `message` is the literal fallback text; when `message_key` resolves in the
    message catalog the localized text replaces it before encoding.
    """

    def __init__(
        self,
        *,
        name: str,
        code: int,
        status_code: int,
        message: str,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.name = name
        self.code = code
        self.status_code = status_code
        self.message = message
        self.message_key = message_key
        self.params = params or {}
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"APIError(name={self.name!r}, code={self.code}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        # `cause` and `message_key` are internal; only these four fields go on the wire.
        return {
            "message": self.message,
            "name": self.name,
            "code": self.code,
            "statusCode": self.status_code,
        }


def internal_server_error(cause: BaseException | None = None) -> APIError:
    return APIError(
        name=NAME_INTERNAL_SERVER_ERROR,
        code=CODE_INTERNAL_SERVER_ERROR,
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred.",
        message_key="default-internal-server-error-message",
        cause=cause,
    )


def unauthorized_error(cause: BaseException | None = None) -> APIError:
    return APIError(
        name=NAME_UNAUTHORIZED_ERROR,
        code=CODE_UNAUTHORIZED_ERROR,
        status_code=HTTP_401_UNAUTHORIZED,
        message="You are not authorized to perform this operation.",
        message_key="default-unauthorized-error-message",
        cause=cause,
    )


def bad_request_error(cause: BaseException, *, message_key: str | None = None) -> APIError:
    """
    Wrap a caller-correctable failure.

    The cause's text becomes the fallback message, so only exceptions whose
    text is safe for clients (gateway and rule errors) should be wrapped here.
    """

    return APIError(
        name=NAME_BAD_REQUEST_ERROR,
        code=CODE_BAD_REQUEST_ERROR,
        status_code=HTTP_400_BAD_REQUEST,
        message=str(cause),
        message_key=message_key or getattr(cause, "message_key", None),
        cause=cause,
    )


def validation_error(*, field: str, constraint: str, cause: BaseException | None = None) -> APIError:
    return APIError(
        name=NAME_VALIDATION_ERROR,
        code=CODE_VALIDATION_ERROR,
        status_code=HTTP_400_BAD_REQUEST,
        message=f"validation failed, tag: {constraint}, field: {field}",
        message_key="validation-error-message",
        params={"field": field, "constraint": constraint},
        cause=cause,
    )


def could_not_create_reservation(cause: BaseException | None = None) -> APIError:
    return APIError(
        name=NAME_COULD_NOT_CREATE_RESERVATION,
        code=CODE_COULD_NOT_CREATE_RESERVATION,
        status_code=HTTP_400_BAD_REQUEST,
        message="The reservation could not be created.",
        message_key="could-not-create-reservation",
        cause=cause,
    )


def could_not_change_reservation_check_in_date() -> APIError:
    return APIError(
        name=NAME_COULD_NOT_CHANGE_RESERVATION_CHECK_IN_DATE,
        code=CODE_COULD_NOT_CHANGE_RESERVATION_CHECK_IN_DATE,
        status_code=HTTP_400_BAD_REQUEST,
        message="The check-in date of a past reservation cannot be changed.",
        message_key="could-not-change-reservation-check-in-date",
    )


def invalid_accommodation(accommodation: str) -> APIError:
    return APIError(
        name=NAME_INVALID_ACCOMMODATION,
        code=CODE_INVALID_ACCOMMODATION,
        status_code=HTTP_400_BAD_REQUEST,
        message=f"Accommodation {accommodation!r} is not valid.",
        message_key="invalid-accommodation",
        params={"accommodation": accommodation},
    )


def date_parse_error(value: str, cause: BaseException | None = None) -> APIError:
    return APIError(
        name=NAME_DATE_PARSE_ERROR,
        code=CODE_DATE_PARSE_ERROR,
        status_code=HTTP_400_BAD_REQUEST,
        message="failed to parse date",
        message_key="date-parse-error",
        params={"value": value},
        cause=cause,
    )


def check_in_after_checkout() -> APIError:
    return APIError(
        name=NAME_CHECK_IN_AFTER_CHECKOUT,
        code=CODE_CHECK_IN_AFTER_CHECKOUT,
        status_code=HTTP_400_BAD_REQUEST,
        message="The check-in date cannot be later than the check-out date.",
        message_key="check-in-after-checkout",
    )


# --- Module Notes -----------------------------------------------------------
# Factories return fresh instances: localization mutates `message`, so shared
# module-level error objects would leak one caller's language into another's.
