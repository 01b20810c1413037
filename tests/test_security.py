"""Tests for password hashing and token helpers."""

import jwt
import pytest

from auth import security


def test_hash_and_verify_password() -> None:
    hashed = security.hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert security.verify_password("s3cret-pass", hashed)
    assert not security.verify_password("wrong", hashed)


def test_verify_password_handles_garbage_hash() -> None:
    assert not security.verify_password("s3cret-pass", "not-a-bcrypt-hash")
    assert not security.verify_password("", "")


def test_hash_empty_password_fails() -> None:
    with pytest.raises(security.AuthSecurityError):
        security.hash_password("")


def test_access_token_round_trip(monkeypatch) -> None:
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "5")

    token = security.build_access_token(user_id="abc", email="a@example.com", name="A", now=1_700_000_000)
    payload = jwt.decode(
        token,
        security.jwt_secret(),
        algorithms=[security.jwt_algorithm()],
        options={"verify_exp": False},
    )

    assert payload["sub"] == "abc"
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 300


def test_decode_rejects_wrong_secret(monkeypatch) -> None:
    token = security.build_access_token(user_id="abc", email="a@example.com", name="A")
    monkeypatch.setenv("JWT_SECRET", "another-secret")

    with pytest.raises(security.AuthSecurityError, match="Invalid access token"):
        security.decode_access_token(token)


def test_decode_rejects_non_access_token() -> None:
    token = jwt.encode({"sub": "abc", "type": "refresh"}, security.jwt_secret(), algorithm="HS256")

    with pytest.raises(security.AuthSecurityError, match="not an access token"):
        security.decode_access_token(token)


def test_decode_rejects_empty_token() -> None:
    with pytest.raises(security.AuthSecurityError):
        security.decode_access_token("   ")
