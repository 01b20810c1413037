"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas, service
from .dependencies import get_token_payload
from .repository import UserRepository, get_user_repository

router = APIRouter(prefix="/auth")


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=schemas.SignupResponse)
async def signup(
    payload: schemas.SignupRequest,
    repo: UserRepository = Depends(get_user_repository),
) -> schemas.SignupResponse:
    return await service.signup(payload, repo=repo)


@router.post("/login", response_model=schemas.TokenResponse)
async def login(
    payload: schemas.LoginRequest,
    repo: UserRepository = Depends(get_user_repository),
) -> schemas.TokenResponse:
    return await service.login(payload, repo=repo)


@router.get("/verify", response_model=schemas.TokenPayload)
async def verify(token_payload: dict = Depends(get_token_payload)) -> schemas.TokenPayload:
    """
    Check the bearer token and echo back who it belongs to.
    """
    return schemas.TokenPayload(
        id=service.token_subject(token_payload),
        email=str(token_payload.get("email") or ""),
        name=str(token_payload.get("name") or ""),
    )
