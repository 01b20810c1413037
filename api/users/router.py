"""
User API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from auth import dependencies as auth_dependencies
from auth import schemas as auth_schemas

router = APIRouter(prefix="/api/users")


@router.get("/{user_id}", response_model=auth_schemas.UserResponse)
async def get_user(
    user_id: UUID,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Return the caller's own record. Other users' ids are refused.
    """
    if str(current_user["id"]) != str(user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only read your own user record.",
        )
    return current_user
