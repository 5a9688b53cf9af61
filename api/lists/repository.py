"""
Lists persistence.
This module is where lists-related SQL lives.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

from .fields import LISTS_TABLE


async def get_all_lists(db: Database, *, user_id: int) -> list[dict[str, Any]]:
    return await db.query_rows(
        """
        SELECT *
        FROM lists
        WHERE user_id = $1
        """,
        user_id,
    )


async def get_list(db: Database, *, user_id: int, list_id: int) -> list[dict[str, Any]]:
    return await db.query_rows(
        """
        SELECT *
        FROM lists
        WHERE user_id = $1
          AND list_id = $2
        """,
        user_id,
        list_id,
    )


async def create_list(db: Database, *, user_id: int, values: dict[str, Any]) -> dict[str, Any]:
    # Owner always comes from the caller.
    return await db.insert_returning(LISTS_TABLE, {**values, "user_id": user_id})


async def update_list(
    db: Database,
    *,
    user_id: int,
    list_id: int,
    patch: dict[str, Any],
) -> dict[str, Any] | None:
    return await db.update_returning(
        LISTS_TABLE,
        {"user_id": user_id, "list_id": list_id},
        patch,
    )


async def delete_list(db: Database, *, user_id: int, list_id: int) -> int:
    return await db.delete_by_key(LISTS_TABLE, {"user_id": user_id, "list_id": list_id})
