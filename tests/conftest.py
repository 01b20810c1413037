"""Shared test fixtures."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

import asyncpg
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from auth.repository import get_user_repository
from cohorts.repository import get_cohort_repository
from core.db import Database
from main import create_app
from students.repository import get_student_repository

COHORT_DEFAULTS: dict[str, Any] = {
    "cohort_slug": None,
    "cohort_name": None,
    "program": None,
    "format": None,
    "campus": None,
    "end_date": None,
    "in_progress": False,
    "program_manager": None,
    "lead_teacher": None,
    "total_hours": 360,
}

STUDENT_DEFAULTS: dict[str, Any] = {
    "first_name": None,
    "last_name": None,
    "email": None,
    "phone": None,
    "linkedin_url": "",
    "languages": [],
    "program": None,
    "background": "",
    "image": "https://i.imgur.com/r8bo8u7.png",
    "cohort": None,
    "projects": [],
}


@dataclass
class InMemoryStore:
    """Tables shared by the in-memory repositories."""

    cohorts: dict[UUID, dict[str, Any]] = field(default_factory=dict)
    students: dict[UUID, dict[str, Any]] = field(default_factory=dict)
    users: dict[UUID, dict[str, Any]] = field(default_factory=dict)


@dataclass
class InMemoryCohortRepository:
    """In-memory cohort repository for tests."""

    store: InMemoryStore

    async def create(self, values: dict[str, Any]) -> dict[str, Any]:
        self._check_unique_slug(values.get("cohort_slug"))
        row = {"id": uuid4(), **COHORT_DEFAULTS, "start_date": datetime.now(timezone.utc), **values}
        self.store.cohorts[row["id"]] = row
        return copy.deepcopy(row)

    async def list_all(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(row) for row in self.store.cohorts.values()]

    async def get(self, cohort_id: UUID) -> dict[str, Any] | None:
        row = self.store.cohorts.get(cohort_id)
        return copy.deepcopy(row) if row is not None else None

    async def update(self, cohort_id: UUID, values: dict[str, Any]) -> dict[str, Any] | None:
        row = self.store.cohorts.get(cohort_id)
        if row is None:
            return None
        if "cohort_slug" in values and values["cohort_slug"] != row["cohort_slug"]:
            self._check_unique_slug(values["cohort_slug"])
        row.update(values)
        return copy.deepcopy(row)

    async def delete(self, cohort_id: UUID) -> dict[str, Any] | None:
        return self.store.cohorts.pop(cohort_id, None)

    async def count_students(self, cohort_id: UUID) -> int:
        return sum(1 for s in self.store.students.values() if s["cohort"] == cohort_id)

    def _check_unique_slug(self, slug: str | None) -> None:
        if slug is not None and any(c["cohort_slug"] == slug for c in self.store.cohorts.values()):
            raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")


@dataclass
class InMemoryStudentRepository:
    """In-memory student repository for tests; populated reads join the cohort table."""

    store: InMemoryStore

    def _check_cohort(self, cohort_id: UUID | None) -> None:
        if cohort_id is not None and cohort_id not in self.store.cohorts:
            raise asyncpg.ForeignKeyViolationError("insert or update violates foreign key constraint")

    def _populate(self, row: dict[str, Any]) -> dict[str, Any]:
        student = copy.deepcopy(row)
        cohort = self.store.cohorts.get(row["cohort"]) if row["cohort"] is not None else None
        student["cohort"] = copy.deepcopy(cohort)
        return student

    async def create(self, values: dict[str, Any]) -> dict[str, Any]:
        self._check_cohort(values.get("cohort"))
        row = {"id": uuid4(), **STUDENT_DEFAULTS, **values}
        self.store.students[row["id"]] = row
        return copy.deepcopy(row)

    async def list_populated(self, *, cohort_id: UUID | None = None) -> list[dict[str, Any]]:
        return [
            self._populate(row)
            for row in self.store.students.values()
            if cohort_id is None or row["cohort"] == cohort_id
        ]

    async def get_populated(self, student_id: UUID) -> dict[str, Any] | None:
        row = self.store.students.get(student_id)
        return self._populate(row) if row is not None else None

    async def update(self, student_id: UUID, values: dict[str, Any]) -> dict[str, Any] | None:
        row = self.store.students.get(student_id)
        if row is None:
            return None
        if "cohort" in values:
            self._check_cohort(values["cohort"])
        row.update(values)
        return copy.deepcopy(row)

    async def delete(self, student_id: UUID) -> dict[str, Any] | None:
        return self.store.students.pop(student_id, None)


@dataclass
class InMemoryUserRepository:
    """In-memory user repository that records every lookup."""

    store: InMemoryStore
    lookups: list[Any] = field(default_factory=list)

    async def create_user(self, *, email: str, password_hash: str, name: str = "") -> dict:
        row = {
            "id": uuid4(),
            "email": email.strip().lower(),
            "name": name.strip(),
            "password_hash": password_hash,
            "is_active": True,
            "created_at": datetime.now(timezone.utc),
            "updated_at": datetime.now(timezone.utc),
        }
        self.store.users[row["id"]] = row
        return dict(row)

    async def get_user_by_email(self, email: str) -> dict | None:
        self.lookups.append(email)
        for row in self.store.users.values():
            if row["email"] == email.strip().lower():
                return dict(row)
        return None

    async def get_user_by_id(self, user_id: UUID) -> dict | None:
        self.lookups.append(user_id)
        row = self.store.users.get(user_id)
        return dict(row) if row is not None else None


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def user_repository(store: InMemoryStore) -> InMemoryUserRepository:
    return InMemoryUserRepository(store)


@pytest.fixture
def app(store: InMemoryStore, user_repository: InMemoryUserRepository) -> FastAPI:
    app = create_app(Database("postgresql://localhost:5432/cohort_tools_test"))
    app.dependency_overrides[get_cohort_repository] = lambda: InMemoryCohortRepository(store)
    app.dependency_overrides[get_student_repository] = lambda: InMemoryStudentRepository(store)
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def cohort(client: TestClient) -> dict:
    response = client.post(
        "/api/cohorts",
        json={"cohortSlug": "w1", "cohortName": "Web1", "totalHours": 360},
    )
    assert response.status_code == 200
    return response.json()
