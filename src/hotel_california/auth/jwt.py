"""
hotel_california.auth.jwt

JWT issuing and signature validation helpers.

Responsibilities:
- Issue time-boxed HS256 tokens on sign-in.
- Decode tokens and verify their signature; claim semantics live in `auth.guard`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    secret: str


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    ttl: timedelta = timedelta(hours=24),
    now: datetime | None = None,
) -> str:
    now = now or datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # Expiry and subject are interpreted by the guard (expiry first), so PyJWT
        # only checks the signature and that `exp` is present.
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            options={
                "require": ["exp"],
                "verify_exp": False,
                "verify_iat": False,
                "verify_sub": False,
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services.account_service.AccountService.sign_in`.
