"""
User persistence.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends

from core.db import Database, get_database

_USER_COLUMNS = "id, email, name, password_hash, is_active, created_at, updated_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_user(self, *, email: str, password_hash: str, name: str = "") -> dict:
        row = await self.db.fetch_one(
            f"""
            INSERT INTO users (email, password_hash, name)
            VALUES ($1, $2, $3)
            RETURNING {_USER_COLUMNS}
            """,
            normalize_email(email),
            password_hash,
            name.strip(),
        )
        if row is None:
            raise RuntimeError("Failed to create user.")
        return row

    async def get_user_by_email(self, email: str) -> dict | None:
        return await self.db.fetch_one(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE lower(email) = lower($1)
            """,
            normalize_email(email),
        )

    async def get_user_by_id(self, user_id: UUID) -> dict | None:
        return await self.db.fetch_one(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE id = $1
            """,
            user_id,
        )


def get_user_repository(db: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(db)
