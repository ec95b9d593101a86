"""Password hashing and JWT tests."""

from datetime import timedelta

import pytest

from src.shared.utils.security import SecurityUtils

SECRET = "unit-test-secret-key-with-enough-length"


def test_hash_password_is_salted():
    """Hashing the same password twice gives different hashes."""
    first = SecurityUtils.hash_password("password123")
    second = SecurityUtils.hash_password("password123")

    assert first != second
    assert "password123" not in first


def test_verify_password():
    """The right password verifies, a wrong one does not."""
    hashed = SecurityUtils.hash_password("password123")

    assert SecurityUtils.verify_password("password123", hashed)
    assert not SecurityUtils.verify_password("password124", hashed)


@pytest.mark.parametrize("hashed", [None, ""])
def test_verify_password_without_hash(hashed):
    """A missing hash never verifies."""
    assert SecurityUtils.verify_password("password123", hashed) is False


def test_unusable_password_hash_is_random():
    """Placeholder hashes are valid bcrypt hashes of unknown secrets."""
    hashed = SecurityUtils.unusable_password_hash()

    assert hashed.startswith("$2")
    assert hashed != SecurityUtils.unusable_password_hash()
    assert not SecurityUtils.verify_password("", hashed)


def test_access_token_round_trip():
    """Claims survive encoding and exp/iat are added."""
    token = SecurityUtils.create_access_token(
        data={"user_id": "abc", "email": "a@example.com"},
        secret_key=SECRET,
        expires_delta=timedelta(minutes=5),
    )

    payload = SecurityUtils.decode_access_token(token, SECRET)

    assert payload["user_id"] == "abc"
    assert payload["email"] == "a@example.com"
    assert payload["exp"] > payload["iat"]


def test_expired_token_rejected():
    """A token past its exp cannot be decoded."""
    token = SecurityUtils.create_access_token(
        data={"user_id": "abc"},
        secret_key=SECRET,
        expires_delta=timedelta(seconds=-10),
    )

    with pytest.raises(ValueError, match="expired"):
        SecurityUtils.decode_access_token(token, SECRET)


def test_token_signed_with_other_key_rejected():
    """Signature verification uses the configured key."""
    token = SecurityUtils.create_access_token(data={"user_id": "abc"}, secret_key=SECRET)

    with pytest.raises(ValueError, match="Invalid token"):
        SecurityUtils.decode_access_token(token, "another-secret-key-with-enough-length")


def test_garbage_token_rejected():
    with pytest.raises(ValueError):
        SecurityUtils.decode_access_token("not-a-jwt", SECRET)
