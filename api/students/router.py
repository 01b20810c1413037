"""
Student API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from . import schemas, service
from .repository import StudentRepository, get_student_repository

router = APIRouter(prefix="/api/students")


@router.post("", response_model=schemas.StudentResponse)
async def create_student(
    payload: schemas.StudentCreate,
    repo: StudentRepository = Depends(get_student_repository),
) -> dict:
    return await service.create_student(payload, repo=repo)


@router.get("", response_model=list[schemas.PopulatedStudentResponse])
async def list_students(
    repo: StudentRepository = Depends(get_student_repository),
) -> list[dict]:
    return await service.list_students(repo=repo)


@router.get("/cohort/{cohort_id}", response_model=list[schemas.PopulatedStudentResponse])
async def list_students_by_cohort(
    cohort_id: UUID,
    repo: StudentRepository = Depends(get_student_repository),
) -> list[dict]:
    return await service.list_students_by_cohort(cohort_id, repo=repo)


@router.get("/{student_id}", response_model=schemas.PopulatedStudentResponse | None)
async def get_student(
    student_id: UUID,
    repo: StudentRepository = Depends(get_student_repository),
) -> dict | None:
    return await service.get_student(student_id, repo=repo)


@router.put("/{student_id}", response_model=schemas.StudentResponse | None)
async def update_student(
    student_id: UUID,
    payload: schemas.StudentUpdate,
    repo: StudentRepository = Depends(get_student_repository),
) -> dict | None:
    return await service.update_student(student_id, payload, repo=repo)


@router.delete("/{student_id}", response_model=schemas.StudentResponse | None)
async def delete_student(
    student_id: UUID,
    repo: StudentRepository = Depends(get_student_repository),
) -> dict | None:
    return await service.delete_student(student_id, repo=repo)
