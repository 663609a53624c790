# tests/test_token_service.py

from __future__ import annotations

import jwt
import pytest

from taskboard.services.token_service import TokenService
from taskboard.utils.errors import (
    AuthError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)

from .conftest import FakeClock

SECRET = "unit-test-secret-with-enough-bytes-for-hs256"


def make_service(clock: FakeClock, ttl: int = 60) -> TokenService:
    return TokenService(secret=SECRET, ttl_seconds=ttl, clock=clock)


def test_issue_then_verify_returns_identity(clock: FakeClock) -> None:
    service = make_service(clock)

    token = service.issue("user-123")

    assert service.verify(token) == "user-123"


def test_issue_accepts_user_record(clock: FakeClock, alice) -> None:
    service = make_service(clock)

    assert service.verify(service.issue(alice)) == alice.id


def test_claims_carry_issue_and_expiry_times(clock: FakeClock) -> None:
    service = make_service(clock, ttl=90)

    claims = jwt.decode(service.issue("u1"), SECRET, algorithms=["HS256"], options={"verify_exp": False})

    assert claims["sub"] == "u1"
    assert claims["exp"] - claims["iat"] == 90
    assert claims["iat"] == int(clock.now.timestamp())


def test_token_valid_until_just_before_expiry(clock: FakeClock) -> None:
    service = make_service(clock, ttl=60)
    token = service.issue("u1")

    clock.advance(59)

    assert service.verify(token) == "u1"


def test_token_past_ttl_is_expired(clock: FakeClock) -> None:
    service = make_service(clock, ttl=60)
    token = service.issue("u1")

    clock.advance(61)

    with pytest.raises(TokenExpiredError) as exc_info:
        service.verify(token)
    assert exc_info.value.reason == "expired"


def test_token_signed_with_other_secret_is_rejected(clock: FakeClock) -> None:
    other = TokenService(secret="a-completely-different-secret-value-xyz", ttl_seconds=60, clock=clock)
    token = other.issue("u1")

    with pytest.raises(InvalidSignatureError) as exc_info:
        make_service(clock).verify(token)
    assert exc_info.value.reason == "invalid_signature"


def test_tampered_payload_fails_signature_check(clock: FakeClock) -> None:
    service = make_service(clock)
    header, _payload, signature = service.issue("u1").split(".")
    forged_payload = jwt.encode(
        {"sub": "someone-else", "iat": 0, "exp": 2**31}, "guess", algorithm="HS256"
    ).split(".")[1]

    with pytest.raises(InvalidSignatureError):
        service.verify(f"{header}.{forged_payload}.{signature}")


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c", "Bearer abc"])
def test_garbage_is_malformed(clock: FakeClock, token: str) -> None:
    with pytest.raises(MalformedTokenError) as exc_info:
        make_service(clock).verify(token)
    assert exc_info.value.reason == "malformed"


def test_missing_subject_is_malformed(clock: FakeClock) -> None:
    now = int(clock.now.timestamp())
    token = jwt.encode({"iat": now, "exp": now + 60}, SECRET, algorithm="HS256")

    with pytest.raises(MalformedTokenError):
        make_service(clock).verify(token)


def test_missing_expiry_is_malformed(clock: FakeClock) -> None:
    token = jwt.encode({"sub": "u1", "iat": int(clock.now.timestamp())}, SECRET, algorithm="HS256")

    with pytest.raises(MalformedTokenError):
        make_service(clock).verify(token)


def test_all_failures_share_a_base_class(clock: FakeClock) -> None:
    for error in (MalformedTokenError, InvalidSignatureError, TokenExpiredError):
        assert issubclass(error, AuthError)


def test_rejects_unusable_configuration() -> None:
    with pytest.raises(ValueError):
        TokenService(secret="", ttl_seconds=60)
    with pytest.raises(ValueError):
        TokenService(secret=SECRET, ttl_seconds=0)
