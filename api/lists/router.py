"""
Lists API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_database

from . import service

router = APIRouter(prefix="/api/lists")


def _location(list_id: Any) -> str:
    return f"{router.prefix}/{list_id}"


@router.get("")
async def get_all_lists(
    db: Database = Depends(get_database),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> list[dict]:
    return await service.get_all_lists(db, user_id=user_id)


@router.get("/{list_id}")
async def get_one_list(
    list_id: str,
    db: Database = Depends(get_database),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> list[dict]:
    """
    Always an array: empty when the list does not exist or is not the caller's.
    """
    return await service.get_one_list(db, user_id=user_id, raw_list_id=list_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_list(
    response: Response,
    body: Any = Body(...),
    db: Database = Depends(get_database),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    created = await service.create_list(db, user_id=user_id, body=body)
    response.headers["Location"] = _location(created["list_id"])
    return created


@router.put("/{list_id}")
async def update_list(
    list_id: str,
    response: Response,
    body: Any = Body(...),
    db: Database = Depends(get_database),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    updated = await service.update_list(db, user_id=user_id, raw_list_id=list_id, body=body)
    response.headers["Location"] = _location(updated["list_id"])
    return updated


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_list(
    list_id: str,
    db: Database = Depends(get_database),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> Response:
    await service.delete_list(db, user_id=user_id, raw_list_id=list_id)
    # 204 carries no body.
    return Response(status_code=status.HTTP_204_NO_CONTENT)
