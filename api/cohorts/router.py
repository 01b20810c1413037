"""
Cohort API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from . import schemas, service
from .repository import CohortRepository, get_cohort_repository

router = APIRouter(prefix="/api/cohorts")


@router.post("", response_model=schemas.CohortResponse)
async def create_cohort(
    payload: schemas.CohortCreate,
    repo: CohortRepository = Depends(get_cohort_repository),
) -> dict:
    return await service.create_cohort(payload, repo=repo)


@router.get("", response_model=list[schemas.CohortResponse])
async def list_cohorts(
    repo: CohortRepository = Depends(get_cohort_repository),
) -> list[dict]:
    return await service.list_cohorts(repo=repo)


@router.get("/{cohort_id}", response_model=schemas.CohortResponse | None)
async def get_cohort(
    cohort_id: UUID,
    repo: CohortRepository = Depends(get_cohort_repository),
) -> dict | None:
    return await service.get_cohort(cohort_id, repo=repo)


@router.put("/{cohort_id}", response_model=schemas.CohortResponse | None)
async def update_cohort(
    cohort_id: UUID,
    payload: schemas.CohortUpdate,
    repo: CohortRepository = Depends(get_cohort_repository),
) -> dict | None:
    return await service.update_cohort(cohort_id, payload, repo=repo)


@router.delete("/{cohort_id}", response_model=schemas.CohortResponse | None)
async def delete_cohort(
    cohort_id: UUID,
    repo: CohortRepository = Depends(get_cohort_repository),
) -> dict | None:
    return await service.delete_cohort(cohort_id, repo=repo)
