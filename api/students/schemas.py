"""
Student request/response schemas.
"""

from __future__ import annotations

from typing import Any, Literal
from uuid import UUID

from pydantic import Field

from cohorts.schemas import CohortResponse, Program
from core.schemas import CamelModel

Language = Literal["English", "Spanish", "French", "German", "Portuguese", "Dutch", "Other"]


class StudentFields(CamelModel):
    first_name: str | None = Field(default=None, max_length=200)
    last_name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    linkedin_url: str | None = None
    languages: list[Language] | None = None
    program: Program | None = None
    background: str | None = None
    image: str | None = None
    projects: list[Any] | None = None


class StudentCreate(StudentFields):
    cohort: UUID | None = None


class StudentUpdate(StudentFields):
    """
    Only fields present in the body are written.
    """

    cohort: UUID | None = None


class StudentResponse(StudentFields):
    id: UUID = Field(alias="_id")
    cohort: UUID | None = None


class PopulatedStudentResponse(StudentFields):
    id: UUID = Field(alias="_id")
    cohort: CohortResponse | None = None
