import pytest

from novashop.core.errors import ValidationError
from novashop.core.security import DEFAULT_ROUNDS, PasswordHasher


@pytest.fixture()
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_is_salted_bcrypt_and_never_plaintext(hasher):
    first = hasher.hash("pw123")
    second = hasher.hash("pw123")

    assert "pw123" not in first
    assert first.startswith("$2b$04$")
    assert first != second


def test_verify_accepts_right_password_only(hasher):
    hashed = hasher.hash("pw123")

    assert hasher.verify("pw123", hashed) is True
    assert hasher.verify("pw124", hashed) is False
    assert hasher.verify("", hashed) is False


def test_verify_returns_false_for_malformed_hash(hasher):
    assert hasher.verify("pw123", "not-a-bcrypt-hash") is False
    assert hasher.verify("pw123", "") is False


def test_empty_password_is_rejected_before_hashing(hasher):
    with pytest.raises(ValidationError):
        hasher.hash("")


def test_default_cost_factor_is_ten():
    hasher = PasswordHasher()
    assert hasher.rounds == DEFAULT_ROUNDS == 10
    assert hasher.hash("pw123").startswith("$2b$10$")


def test_passwords_longer_than_72_bytes_are_accepted(hasher):
    long_password = "x" * 100
    hashed = hasher.hash(long_password)
    assert hasher.verify(long_password, hashed)


def test_burn_does_not_raise(hasher):
    hasher.burn("whatever")
    hasher.burn("")
