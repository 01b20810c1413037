"""
Cohort persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import Depends

from core.db import Database, get_database, insert_sql, update_sql

COLUMNS = (
    "cohort_slug",
    "cohort_name",
    "program",
    "format",
    "campus",
    "start_date",
    "end_date",
    "in_progress",
    "program_manager",
    "lead_teacher",
    "total_hours",
)

SELECT_COLUMNS = ", ".join(("id", *COLUMNS))


class CohortRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self, values: dict[str, Any]) -> dict[str, Any]:
        sql, args = insert_sql("cohorts", values, allowed=COLUMNS, returning=SELECT_COLUMNS)
        row = await self.db.fetch_one(sql, *args)
        if row is None:
            raise RuntimeError("Failed to create cohort.")
        return row

    async def list_all(self) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            f"""
            SELECT {SELECT_COLUMNS}
            FROM cohorts
            ORDER BY created_at, id
            """
        )

    async def get(self, cohort_id: UUID) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"""
            SELECT {SELECT_COLUMNS}
            FROM cohorts
            WHERE id = $1
            """,
            cohort_id,
        )

    async def update(self, cohort_id: UUID, values: dict[str, Any]) -> dict[str, Any] | None:
        if not values:
            return await self.get(cohort_id)
        sql, args = update_sql("cohorts", cohort_id, values, allowed=COLUMNS, returning=SELECT_COLUMNS)
        return await self.db.fetch_one(sql, *args)

    async def delete(self, cohort_id: UUID) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"""
            DELETE FROM cohorts
            WHERE id = $1
            RETURNING {SELECT_COLUMNS}
            """,
            cohort_id,
        )

    async def count_students(self, cohort_id: UUID) -> int:
        n = await self.db.fetch_val(
            """
            SELECT count(*)
            FROM students
            WHERE cohort_id = $1
            """,
            cohort_id,
        )
        return int(n or 0)


def get_cohort_repository(db: Database = Depends(get_database)) -> CohortRepository:
    return CohortRepository(db)
