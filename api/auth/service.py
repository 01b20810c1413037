"""
Auth business logic.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status

from . import schemas, security
from .repository import UserRepository

logger = logging.getLogger(__name__)

_BEARER = {"WWW-Authenticate": "Bearer"}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, headers=_BEARER)


async def signup(payload: schemas.SignupRequest, *, repo: UserRepository) -> schemas.SignupResponse:
    existing = await repo.get_user_by_email(payload.email)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered.",
        )

    user_row = await repo.create_user(
        email=payload.email,
        password_hash=security.hash_password(payload.password),
        name=payload.name,
    )
    logger.info("user_signed_up id=%s", user_row["id"])
    return schemas.SignupResponse(user=schemas.UserResponse.model_validate(user_row))


async def login(payload: schemas.LoginRequest, *, repo: UserRepository) -> schemas.TokenResponse:
    user_row = await repo.get_user_by_email(payload.email)
    if user_row is None or not security.verify_password(
        payload.password, str(user_row.get("password_hash") or "")
    ):
        raise _unauthorized("Invalid email or password.")

    if not bool(user_row.get("is_active", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive.",
        )

    token = security.build_access_token(
        user_id=str(user_row["id"]),
        email=str(user_row["email"]),
        name=str(user_row.get("name") or ""),
    )
    return schemas.TokenResponse(auth_token=token)


def decode_token(access_token: str) -> dict:
    try:
        return security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise _unauthorized(str(exc)) from exc


def token_subject(payload: dict) -> UUID:
    try:
        return UUID(str(payload.get("sub") or ""))
    except ValueError as exc:
        raise _unauthorized("Invalid access token subject.") from exc


async def get_user_from_token_payload(payload: dict, *, repo: UserRepository) -> dict:
    user_row = await repo.get_user_by_id(token_subject(payload))
    if user_row is None:
        raise _unauthorized("User not found.")
    if not bool(user_row.get("is_active", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive.",
        )
    return user_row
