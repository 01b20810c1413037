"""
Cohort request/response schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel

Program = Literal["Web Dev", "UX/UI", "Data Analytics", "Cybersecurity"]
CohortFormat = Literal["Full Time", "Part Time"]
Campus = Literal[
    "Madrid",
    "Barcelona",
    "Miami",
    "Paris",
    "Berlin",
    "Amsterdam",
    "Lisbon",
    "Remote",
]


class CohortFields(CamelModel):
    cohort_slug: str | None = Field(default=None, max_length=200)
    cohort_name: str | None = Field(default=None, max_length=200)
    program: Program | None = None
    format: CohortFormat | None = None
    campus: Campus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    in_progress: bool | None = None
    program_manager: str | None = Field(default=None, max_length=200)
    lead_teacher: str | None = Field(default=None, max_length=200)
    total_hours: int | None = Field(default=None, ge=0)


class CohortCreate(CohortFields):
    """
    Fields left out of the body take the store defaults.
    """


class CohortUpdate(CohortFields):
    """
    Only fields present in the body are written.
    """


class CohortResponse(CohortFields):
    id: UUID = Field(alias="_id")
