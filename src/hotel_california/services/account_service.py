"""
hotel_california.services.account_service

Account use cases.

Responsibilities:
- Sign a user in by username + password digest and issue a 24h token.
- Register users (dev/test convenience) with the same digest algorithm.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from hotel_california import errors
from hotel_california.auth.jwt import JwtConfig, issue_token
from hotel_california.db.gateway import GatewayError, PersistenceGateway
from hotel_california.observability.logging import get_logger

log = get_logger(__name__)


def password_digest(password: str) -> str:
    # Fixed-length (32 hex chars) and deterministic; must match how stored accounts were hashed.
    return hashlib.md5(password.encode("utf-8")).hexdigest()


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class AccountService:
    def __init__(
        self,
        *,
        gateway: PersistenceGateway,
        jwt_cfg: JwtConfig,
        token_ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gateway = gateway
        self._jwt_cfg = jwt_cfg
        self._token_ttl = token_ttl
        self._clock = clock

    async def sign_in(self, *, username: str, password: str) -> str:
        try:
            user = await self._gateway.sign_in(username, password_digest(password))
        except GatewayError as e:
            log.error(
                "sign_in_failed",
                method="SignIn",
                action="gateway.sign_in",
                username=username,
                error=str(e),
            )
            raise errors.bad_request_error(e) from e

        token = issue_token(
            cfg=self._jwt_cfg,
            subject=str(user.id),
            ttl=self._token_ttl,
            now=self._clock(),
        )
        log.info("signed_in", user_id=user.id)
        return token

    async def register_user(
        self, *, first_name: str, last_name: str, username: str, password: str
    ) -> int:
        try:
            user = await self._gateway.create_user(
                first_name=first_name,
                last_name=last_name,
                username=username,
                password_digest=password_digest(password),
            )
        except GatewayError as e:
            log.error(
                "register_user_failed",
                method="RegisterUser",
                action="gateway.create_user",
                username=username,
                error=str(e),
            )
            raise errors.bad_request_error(e) from e
        return user.id
