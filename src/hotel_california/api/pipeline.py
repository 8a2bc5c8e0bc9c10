"""
hotel_california.api.pipeline

Request pipeline shared by every endpoint.

Responsibilities:
- Run each request through decode -> validate -> [authenticate] -> execute ->
  localize -> encode.
- Convert every failure into the uniform APIError envelope exactly once.
- Keep causing errors in the logs and out of responses.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from hotel_california import errors
from hotel_california.api.requests import LANGUAGE_HEADER, WireRequest
from hotel_california.auth.guard import AuthenticationError, AuthGuard
from hotel_california.auth.models import Principal
from hotel_california.db.gateway import PersistenceGateway
from hotel_california.errors import APIError
from hotel_california.localization.catalog import MessageCatalog, Translator
from hotel_california.observability.logging import get_logger
from hotel_california.services.account_service import AccountService
from hotel_california.services.reservation_service import ReservationService

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Services:
    accounts: AccountService
    reservations: ReservationService
    gateway: PersistenceGateway


Executor = Callable[[Services, Any, Principal | None], Awaitable[dict[str, Any]]]


@dataclass(frozen=True, slots=True)
class Operation:
    """
    One endpoint: how to decode its request, whether it needs a principal,
    and which service call produces its `data` payload.
    """

    name: str
    decode: Callable[[WireRequest], Any]
    execute: Executor
    authenticated: bool = True


class RequestPipeline:
    def __init__(self, *, catalog: MessageCatalog, guard: AuthGuard, services: Services) -> None:
        self._catalog = catalog
        self._guard = guard
        self._services = services

    async def handle(self, request: Request, operation: Operation) -> JSONResponse:
        translator = self._catalog.translator(request.headers.get(LANGUAGE_HEADER))
        try:
            wire = await WireRequest.read(request)
            typed = operation.decode(wire)
            principal = self._authenticate(operation, typed)
            data = await operation.execute(self._services, typed, principal)
        except APIError as e:
            return self._encode_error(operation, e, translator)
        except Exception as e:
            # Unclassified failures never expose their text to the caller.
            log.exception("unhandled_error", operation=operation.name)
            return self._encode_error(operation, errors.internal_server_error(cause=e), translator)

        return JSONResponse({"data": data, "result": None})

    def _authenticate(self, operation: Operation, typed: Any) -> Principal | None:
        if not operation.authenticated:
            return None
        try:
            return self._guard.authenticate(getattr(typed, "token", None))
        except AuthenticationError as e:
            log.warning(
                "authentication_failed",
                operation=operation.name,
                reason=type(e).__name__,
                error=str(e),
            )
            raise errors.unauthorized_error(cause=e) from e

    def _encode_error(
        self, operation: Operation, err: APIError, translator: Translator
    ) -> JSONResponse:
        translator.localize_error(err)
        if err.status_code >= 500:
            log.error(
                "request_failed",
                operation=operation.name,
                error_name=err.name,
                code=err.code,
                cause=repr(err.cause),
            )
        else:
            log.info(
                "request_rejected",
                operation=operation.name,
                error_name=err.name,
                code=err.code,
            )
        return JSONResponse({"data": None, "result": err.to_dict()}, status_code=err.status_code)


# --- Module Notes -----------------------------------------------------------
# The translator is built per request from the immutable catalog and passed
# explicitly; nothing request-scoped is stored on the pipeline itself.
