"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class SignupRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(default="", max_length=200)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    id: UUID = Field(alias="_id")
    email: str
    name: str
    is_active: bool
    created_at: datetime


class SignupResponse(CamelModel):
    user: UserResponse


class TokenResponse(CamelModel):
    auth_token: str
    token_type: str = "bearer"


class TokenPayload(CamelModel):
    id: UUID = Field(alias="_id")
    email: str
    name: str
