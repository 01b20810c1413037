"""
Cohort operations: thin pass-through to the repository plus the
not-found and delete policies.
"""

from __future__ import annotations

import logging
from uuid import UUID

import asyncpg
from fastapi import HTTPException, status

from core.errors import ensure_found

from . import schemas
from .repository import CohortRepository

logger = logging.getLogger(__name__)


def _cohort_in_use(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


async def create_cohort(payload: schemas.CohortCreate, *, repo: CohortRepository) -> dict:
    row = await repo.create(payload.model_dump(exclude_unset=True))
    logger.info("cohort_created id=%s slug=%s", row["id"], row.get("cohort_slug"))
    return row


async def list_cohorts(*, repo: CohortRepository) -> list[dict]:
    return await repo.list_all()


async def get_cohort(cohort_id: UUID, *, repo: CohortRepository) -> dict | None:
    return ensure_found(await repo.get(cohort_id), "Cohort not found.")


async def update_cohort(
    cohort_id: UUID,
    payload: schemas.CohortUpdate,
    *,
    repo: CohortRepository,
) -> dict | None:
    row = await repo.update(cohort_id, payload.model_dump(exclude_unset=True))
    return ensure_found(row, "Cohort not found.")


async def delete_cohort(cohort_id: UUID, *, repo: CohortRepository) -> dict | None:
    # Students must be moved or deleted first; orphaning them is not allowed.
    linked = await repo.count_students(cohort_id)
    if linked:
        raise _cohort_in_use(f"Cohort still has {linked} student(s) assigned.")

    try:
        row = await repo.delete(cohort_id)
    except asyncpg.ForeignKeyViolationError as exc:
        # A student was assigned between the count and the delete.
        raise _cohort_in_use("Cohort still has students assigned.") from exc
    if row is not None:
        logger.info("cohort_deleted id=%s", cohort_id)
    return ensure_found(row, "Cohort not found.")
