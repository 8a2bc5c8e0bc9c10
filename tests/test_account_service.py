"""
tests.test_account_service

Sign-in and user registration over an in-memory gateway.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from hotel_california.auth.jwt import JwtConfig
from hotel_california.db.gateway import UserNotFoundError
from hotel_california.errors import APIError
from hotel_california.services.account_service import AccountService, password_digest

CFG = JwtConfig(alg="HS256", secret="account-secret")
NOW = datetime(2030, 1, 1, 8, 0, tzinfo=UTC)


@pytest.fixture
def service(gateway) -> AccountService:
    return AccountService(gateway=gateway, jwt_cfg=CFG, clock=lambda: NOW)


def test_password_digest_is_fixed_length_md5_hex() -> None:
    assert password_digest("secret") == "5ebe2294ecd0e0f08eab7690d2a6ee69"
    assert len(password_digest("a much longer password than usual")) == 32


@pytest.mark.asyncio
async def test_sign_in_issues_token_valid_for_24_hours(service) -> None:
    token = await service.sign_in(username="jdoe", password="secret")

    claims = jwt.decode(
        token,
        CFG.secret,
        algorithms=["HS256"],
        options={"verify_exp": False, "verify_iat": False},
    )
    assert claims["sub"] == "1"
    assert claims["exp"] - claims["iat"] == int(timedelta(hours=24).total_seconds())
    assert claims["iat"] == int(NOW.timestamp())


@pytest.mark.asyncio
@pytest.mark.parametrize(("username", "password"), [("jdoe", "wrong"), ("nobody", "secret")])
async def test_sign_in_without_match_is_bad_request(service, username, password) -> None:
    with pytest.raises(APIError) as exc:
        await service.sign_in(username=username, password=password)
    assert exc.value.name == "BadRequestError"
    assert isinstance(exc.value.cause, UserNotFoundError)


@pytest.mark.asyncio
async def test_inactive_or_deleted_user_cannot_sign_in(service, gateway) -> None:
    gateway.users[1].is_active = False
    gateway.users[2].is_deleted = True
    for username in ("jdoe", "jroe"):
        with pytest.raises(APIError):
            await service.sign_in(username=username, password="secret")


@pytest.mark.asyncio
async def test_register_user_stores_digest_not_password(service, gateway) -> None:
    user_id = await service.register_user(
        first_name="Ada", last_name="Lovelace", username="ada", password="engine"
    )
    stored = gateway.users[user_id]
    assert stored.password == password_digest("engine")
    assert await service.sign_in(username="ada", password="engine")


@pytest.mark.asyncio
async def test_register_duplicate_user_is_bad_request(service) -> None:
    with pytest.raises(APIError) as exc:
        await service.register_user(first_name="J", last_name="D", username="jdoe", password="x")
    assert exc.value.name == "BadRequestError"
    assert exc.value.message_key == "user-already-exists"


# --- Module Notes -----------------------------------------------------------
# Tokens are decoded with PyJWT directly to check the claims the service wrote.
