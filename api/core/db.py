"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI opens it on startup and closes it
on shutdown (see `api/main.py`); routes reach it through `get_database`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- identifiers (table/column names) are double-quoted, never parameterized
"""

from __future__ import annotations

import os
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .settings import env_int


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def quote_ident(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Identifier is empty.")
    return '"' + name.replace('"', '""') + '"'


def _where_clause(conditions: Mapping[str, Any], *, start: int) -> tuple[str, list[Any]]:
    parts = []
    args: list[Any] = []
    for offset, (column, value) in enumerate(conditions.items()):
        parts.append(f"{quote_ident(column)} = ${start + offset}")
        args.append(value)
    return " AND ".join(parts), args


def _row_count(status: str) -> int:
    # asyncpg returns the command tag, e.g. "DELETE 1".
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0


class Database:
    """
    Data-access context wrapping an asyncpg pool.
    """

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

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            database_url(),
            min_size=env_int("DB_POOL_MIN_SIZE", 1),
            max_size=env_int("DB_POOL_MAX_SIZE", 5),
            command_timeout=env_int("DB_COMMAND_TIMEOUT_S", 30),
        )

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    async def open(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database is not open. Call open() on startup.")
        return self._pool

    async def query_rows(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool().fetch(sql, *args)
        return [dict(r) for r in rows]

    async def query_row(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool().fetchrow(sql, *args)
        return dict(row) if row is not None else None

    async def insert_returning(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        if not row:
            raise ValueError("Nothing to insert.")

        columns = ", ".join(quote_ident(c) for c in row)
        placeholders = ", ".join(f"${i}" for i in range(1, len(row) + 1))
        inserted = await self.query_row(
            f"INSERT INTO {quote_ident(table)} ({columns}) VALUES ({placeholders}) RETURNING *",
            *row.values(),
        )
        if inserted is None:
            raise RuntimeError(f"Failed to insert into {table}.")
        return inserted

    async def update_returning(
        self,
        table: str,
        conditions: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update rows matching `conditions` and return the first updated row.
        Returns None when nothing matched.
        """
        if not patch:
            raise ValueError("Nothing to update.")
        if not conditions:
            raise ValueError("Refusing to update without conditions.")

        assignments = ", ".join(f"{quote_ident(c)} = ${i}" for i, c in enumerate(patch, start=1))
        where, where_args = _where_clause(conditions, start=len(patch) + 1)
        return await self.query_row(
            f"UPDATE {quote_ident(table)} SET {assignments} WHERE {where} RETURNING *",
            *patch.values(),
            *where_args,
        )

    async def delete_by_key(self, table: str, key: Mapping[str, Any]) -> int:
        if not key:
            raise ValueError("Refusing to delete without a key.")

        where, args = _where_clause(key, start=1)
        status = await self.pool().execute(f"DELETE FROM {quote_ident(table)} WHERE {where}", *args)
        return _row_count(status)


def get_database(request: Request) -> Database:
    return request.app.state.db
