"""
Auth dependencies for protected FastAPI routes.

A request without a valid bearer token is rejected here, before the route
body runs.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import service
from .repository import UserRepository, get_user_repository


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    scheme, _, token = raw.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token.strip()


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_token_payload(access_token: str = Depends(get_bearer_token)) -> dict:
    return service.decode_token(access_token)


async def get_current_user(
    payload: dict = Depends(get_token_payload),
    repo: UserRepository = Depends(get_user_repository),
) -> dict:
    return await service.get_user_from_token_payload(payload, repo=repo)
