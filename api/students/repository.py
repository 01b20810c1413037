"""
Student persistence (raw SQL).

`cohort_id` is exposed to the rest of the app as `cohort`. Populated reads
join the cohort row and nest it under `cohort`.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import Depends

from cohorts import repository as cohort_repository
from core.db import Database, get_database, insert_sql, update_sql

COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "linkedin_url",
    "languages",
    "program",
    "background",
    "image",
    "cohort_id",
    "projects",
)

_FIELD_COLUMNS = tuple(c for c in COLUMNS if c != "cohort_id")

SELECT_COLUMNS = ", ".join(("id", *_FIELD_COLUMNS, "cohort_id AS cohort"))

_COHORT_PREFIX = "cohort__"

POPULATED_SELECT = ", ".join(
    [
        "s.id",
        *(f"s.{c}" for c in _FIELD_COLUMNS),
        f"c.id AS {_COHORT_PREFIX}id",
        *(f"c.{c} AS {_COHORT_PREFIX}{c}" for c in cohort_repository.COLUMNS),
    ]
)


def _to_columns(values: dict[str, Any]) -> dict[str, Any]:
    values = dict(values)
    if "cohort" in values:
        values["cohort_id"] = values.pop("cohort")
    return values


def nest_cohort(row: dict[str, Any]) -> dict[str, Any]:
    """
    Fold the `cohort__*` columns of a joined row into a nested `cohort` dict.

    A student without a cohort gets `cohort = None`.
    """
    student: dict[str, Any] = {}
    cohort: dict[str, Any] = {}
    for key, value in row.items():
        if key.startswith(_COHORT_PREFIX):
            cohort[key[len(_COHORT_PREFIX):]] = value
        else:
            student[key] = value
    student["cohort"] = cohort if cohort.get("id") is not None else None
    return student


class StudentRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self, values: dict[str, Any]) -> dict[str, Any]:
        sql, args = insert_sql(
            "students",
            _to_columns(values),
            allowed=COLUMNS,
            returning=SELECT_COLUMNS,
        )
        row = await self.db.fetch_one(sql, *args)
        if row is None:
            raise RuntimeError("Failed to create student.")
        return row

    async def list_populated(self, *, cohort_id: UUID | None = None) -> list[dict[str, Any]]:
        """
        All students with their cohort joined, optionally limited to one cohort.
        """
        if cohort_id is None:
            rows = await self.db.fetch_all(
                f"""
                SELECT {POPULATED_SELECT}
                FROM students s
                LEFT JOIN cohorts c ON c.id = s.cohort_id
                ORDER BY s.created_at, s.id
                """
            )
        else:
            rows = await self.db.fetch_all(
                f"""
                SELECT {POPULATED_SELECT}
                FROM students s
                LEFT JOIN cohorts c ON c.id = s.cohort_id
                WHERE s.cohort_id = $1
                ORDER BY s.created_at, s.id
                """,
                cohort_id,
            )
        return [nest_cohort(r) for r in rows]

    async def get_populated(self, student_id: UUID) -> dict[str, Any] | None:
        row = await self.db.fetch_one(
            f"""
            SELECT {POPULATED_SELECT}
            FROM students s
            LEFT JOIN cohorts c ON c.id = s.cohort_id
            WHERE s.id = $1
            """,
            student_id,
        )
        return nest_cohort(row) if row is not None else None

    async def get(self, student_id: UUID) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"""
            SELECT {SELECT_COLUMNS}
            FROM students
            WHERE id = $1
            """,
            student_id,
        )

    async def update(self, student_id: UUID, values: dict[str, Any]) -> dict[str, Any] | None:
        if not values:
            return await self.get(student_id)
        sql, args = update_sql(
            "students",
            student_id,
            _to_columns(values),
            allowed=COLUMNS,
            returning=SELECT_COLUMNS,
        )
        return await self.db.fetch_one(sql, *args)

    async def delete(self, student_id: UUID) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"""
            DELETE FROM students
            WHERE id = $1
            RETURNING {SELECT_COLUMNS}
            """,
            student_id,
        )


def get_student_repository(db: Database = Depends(get_database)) -> StudentRepository:
    return StudentRepository(db)
