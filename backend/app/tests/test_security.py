"""
Tests for password hashing and JWT helpers.
"""
from datetime import timedelta
import pytest
from app.core.errors import InvalidToken
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from app.services import auth_service
from app.stores.base import UserRecord


def test_password_hash_roundtrip():
    hashed = get_password_hash("pw123456")
    assert hashed != "pw123456"
    assert hashed.startswith("$2b$")
    assert verify_password("pw123456", hashed)
    assert not verify_password("pw1234567", hashed)


def test_password_hash_is_salted():
    assert get_password_hash("same") != get_password_hash("same")


def test_long_passwords_are_not_truncated():
    base = "a" * 80
    hashed = get_password_hash(base + "1")
    assert not verify_password(base + "2", hashed)


def test_verify_against_garbage_hash():
    assert verify_password("pw", "not-a-bcrypt-hash") is False


def test_token_roundtrip():
    user = UserRecord(id=42, username="alice", email="alice@example.com", hashed_password="x")
    payload = auth_service.verify_token(auth_service.issue_token(user))
    assert payload.user_id == 42
    assert payload.username == "alice"
    assert payload.email == "alice@example.com"


def test_expired_token():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-10))
    assert decode_access_token(token) is None
    with pytest.raises(InvalidToken):
        auth_service.verify_token(token)


@pytest.mark.parametrize("token", [None, "", "not.a.token"])
def test_verify_token_rejects_malformed(token):
    with pytest.raises(InvalidToken):
        auth_service.verify_token(token)


def test_verify_token_rejects_non_numeric_subject():
    token = create_access_token({"sub": "alice"})
    with pytest.raises(InvalidToken):
        auth_service.verify_token(token)
