"""
Student operations.
"""

from __future__ import annotations

import logging
from uuid import UUID

from core.errors import ensure_found

from . import schemas
from .repository import StudentRepository

logger = logging.getLogger(__name__)


async def create_student(payload: schemas.StudentCreate, *, repo: StudentRepository) -> dict:
    row = await repo.create(payload.model_dump(exclude_unset=True))
    logger.info("student_created id=%s cohort=%s", row["id"], row.get("cohort"))
    return row


async def list_students(*, repo: StudentRepository) -> list[dict]:
    return await repo.list_populated()


async def list_students_by_cohort(cohort_id: UUID, *, repo: StudentRepository) -> list[dict]:
    # An unknown cohort simply has no students.
    return await repo.list_populated(cohort_id=cohort_id)


async def get_student(student_id: UUID, *, repo: StudentRepository) -> dict | None:
    return ensure_found(await repo.get_populated(student_id), "Student not found.")


async def update_student(
    student_id: UUID,
    payload: schemas.StudentUpdate,
    *,
    repo: StudentRepository,
) -> dict | None:
    row = await repo.update(student_id, payload.model_dump(exclude_unset=True))
    return ensure_found(row, "Student not found.")


async def delete_student(student_id: UUID, *, repo: StudentRepository) -> dict | None:
    row = await repo.delete(student_id)
    if row is not None:
        logger.info("student_deleted id=%s", student_id)
    return ensure_found(row, "Student not found.")
