"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. The app creates one instance per process
(see `api/main.py`), connects it on startup and closes it on shutdown. Routes
reach it through `Depends(get_database)`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlsplit

import asyncpg
from fastapi import Request


class DatabaseUnavailableError(RuntimeError):
    pass


async def _init_connection(conn: asyncpg.Connection) -> None:
    # Let json/jsonb columns round-trip as plain Python values.
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30,
    ) -> None:
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @property
    def name(self) -> str:
        return urlsplit(self.dsn).path.lstrip("/")

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
            init=_init_connection,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise DatabaseUnavailableError("Database is not connected.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool().fetchrow(sql, *args)
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool().fetch(sql, *args)
        return [dict(r) for r in rows]

    async def fetch_val(self, sql: str, *args: Any) -> Any:
        return await self.pool().fetchval(sql, *args)


def get_database(request: Request) -> Database:
    return request.app.state.db


def _check_columns(values: Mapping[str, Any], allowed: Iterable[str]) -> None:
    unknown = set(values) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown columns: {', '.join(sorted(unknown))}")


def insert_sql(
    table: str,
    values: Mapping[str, Any],
    *,
    allowed: Iterable[str],
    returning: str,
) -> tuple[str, list[Any]]:
    """
    Build an INSERT for the given column values.

    Columns left out fall back to the table defaults, so an empty mapping
    inserts a row made entirely of defaults.
    """
    _check_columns(values, allowed)
    if not values:
        return f"INSERT INTO {table} DEFAULT VALUES RETURNING {returning}", []

    columns = list(values)
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
    sql = (
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({placeholders}) "
        f"RETURNING {returning}"
    )
    return sql, [values[c] for c in columns]


def update_sql(
    table: str,
    record_id: Any,
    values: Mapping[str, Any],
    *,
    allowed: Iterable[str],
    returning: str,
) -> tuple[str, list[Any]]:
    """
    Build an UPDATE ... WHERE id = $1 that writes only the given columns.

    `values` must not be empty; callers read the row instead when there is
    nothing to write.
    """
    _check_columns(values, allowed)
    if not values:
        raise ValueError("update_sql called with no values.")

    columns = list(values)
    assignments = ", ".join(f"{c} = ${i}" for i, c in enumerate(columns, start=2))
    sql = (
        f"UPDATE {table} "
        f"SET {assignments}, updated_at = now() "
        f"WHERE id = $1 "
        f"RETURNING {returning}"
    )
    return sql, [record_id, *(values[c] for c in columns)]
