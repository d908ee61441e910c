import base64
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from novashop.core.errors import InvalidTokenError
from novashop.core.tokens import TOKEN_TTL, TokenService
from novashop.schemas.auth import TokenClaims

SECRET = "test-secret"
ISSUED_AT = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock():
    return FakeClock(ISSUED_AT)


@pytest.fixture()
def tokens(clock):
    return TokenService(SECRET, clock=clock)


@pytest.fixture()
def claims():
    return TokenClaims(
        id=uuid.uuid4(),
        name="Ann",
        email="ann@x.com",
        photo=None,
        role="customer",
    )


def _b64decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_issued_token_round_trips_claims(tokens, claims):
    token = tokens.issue(claims)
    assert tokens.verify(token) == claims


def test_token_embeds_one_day_expiry(tokens, claims):
    token = tokens.issue(claims)
    payload = jwt.get_unverified_claims(token)

    assert TOKEN_TTL == timedelta(days=1)
    assert payload["iat"] == int(ISSUED_AT.timestamp())
    assert payload["exp"] - payload["iat"] == 86400
    assert payload["id"] == str(claims.id)
    assert payload["role"] == "customer"


def test_token_is_valid_until_expiry_boundary(tokens, clock, claims):
    token = tokens.issue(claims)

    clock.now = ISSUED_AT + TOKEN_TTL - timedelta(seconds=1)
    assert tokens.verify(token).email == "ann@x.com"

    clock.now = ISSUED_AT + TOKEN_TTL
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)

    clock.now = ISSUED_AT + timedelta(days=30)
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_any_flipped_signature_byte_is_rejected(tokens, claims):
    token = tokens.issue(claims)
    header, body, signature = token.split(".")
    raw = _b64decode(signature)

    for i in range(len(raw)):
        tampered = bytearray(raw)
        tampered[i] ^= 0x01
        forged = ".".join([header, body, _b64encode(bytes(tampered))])
        with pytest.raises(InvalidTokenError):
            tokens.verify(forged)


def test_token_signed_with_other_secret_is_rejected(clock, claims):
    foreign = TokenService("another-secret", clock=clock).issue(claims)
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET, clock=clock).verify(foreign)


@pytest.mark.parametrize("garbage", ["garbage", "", "a.b.c", "Bearer x"])
def test_malformed_tokens_are_rejected(tokens, garbage):
    with pytest.raises(InvalidTokenError):
        tokens.verify(garbage)


def test_token_without_identity_claims_is_rejected(tokens):
    exp = int((ISSUED_AT + TOKEN_TTL).timestamp())
    token = jwt.encode({"email": "ann@x.com", "exp": exp}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_without_exp_is_rejected(tokens, claims):
    token = jwt.encode(claims.model_dump(mode="json"), SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)
