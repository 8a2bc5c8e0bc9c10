"""
hotel_california.auth.guard

Token verification for authenticated operations.

Responsibilities:
- Verify the token signature against the configured secret.
- Enforce expiry (`now >= exp` is expired) against an injectable clock.
- Convert the `sub` claim into an integer `Principal`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from hotel_california.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
)
from hotel_california.auth.models import Principal


class AuthenticationError(Exception):
    pass


class InvalidTokenError(AuthenticationError):
    pass


class TokenExpiredError(AuthenticationError):
    pass


class MalformedSubjectError(AuthenticationError):
    pass


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class AuthGuard:
    def __init__(self, cfg: JwtConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._cfg = cfg
        self._clock = clock

    def authenticate(self, token: str | None) -> Principal:
        if not token:
            raise InvalidTokenError("missing token")

        try:
            claims = decode_and_validate(cfg=self._cfg, token=token)
        except JwtValidationError as e:
            raise InvalidTokenError(f"invalid token: {e}") from e

        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            raise InvalidTokenError("invalid token: exp claim is not a timestamp")
        if self._clock().timestamp() >= exp:
            raise TokenExpiredError("token has expired")

        subject = claims.get("sub")
        try:
            principal_id = int(str(subject).strip()) if subject is not None else None
        except ValueError:
            principal_id = None
        if principal_id is None:
            raise MalformedSubjectError("error while parsing user ID")

        return Principal(id=principal_id)


# --- Module Notes -----------------------------------------------------------
# The request pipeline calls `authenticate` directly before executing any
# operation that needs a principal; there is no wrapping service layer.
