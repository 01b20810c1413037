"""
Password hashing and access-token helpers.
"""

from __future__ import annotations

import os
import time
from typing import Any

import bcrypt
import jwt

DEFAULT_JWT_SECRET = "dev-change-this-secret"


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Set JWT_SECRET outside local development.
    return os.environ.get("JWT_SECRET", DEFAULT_JWT_SECRET).strip() or DEFAULT_JWT_SECRET


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    raw = os.environ.get("ACCESS_TOKEN_EXPIRE_MIN", "").strip()
    try:
        return int(raw) if raw else 360
    except ValueError:
        return 360


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: str, email: str, name: str, now: int | None = None) -> str:
    issued_at = int(time.time()) if now is None else now
    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + access_token_expire_minutes() * 60,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if str(payload.get("type") or "").lower() != "access":
        raise AuthSecurityError("Token is not an access token.")
    return payload
