"""
Lists business logic.

Every write validates the request body first; nothing reaches the database
when validation fails.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ValidationError

from core.db import Database
from core.errors import ApiError

from . import repository, schemas
from .fields import LISTS_TABLE_FIELDS, updateable_fields
from .validation import parse_list_id, validate_request_body

logger = logging.getLogger(__name__)

UPDATEABLE_LIST_FIELDS = updateable_fields(LISTS_TABLE_FIELDS)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _not_found(list_id: int) -> ApiError:
    return ApiError(406, f"Could not find a list with listId: {list_id}.")


def _pick_updateable(body: dict[str, Any]) -> dict[str, Any]:
    return {field: body[field] for field in UPDATEABLE_LIST_FIELDS if field in body}


def _parse_payload(model: type[BaseModel], values: dict[str, Any]) -> dict[str, Any]:
    try:
        parsed = model.model_validate(values)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first.get("loc", ())) or "body"
        raise ApiError(400, f"Invalid value for {where}: {first.get('msg', 'invalid')}.") from exc
    return parsed.model_dump(exclude_unset=True)


async def get_all_lists(db: Database, *, user_id: int) -> list[dict[str, Any]]:
    return await repository.get_all_lists(db, user_id=user_id)


async def get_one_list(db: Database, *, user_id: int, raw_list_id: str) -> list[dict[str, Any]]:
    list_id = parse_list_id(raw_list_id)
    return await repository.get_list(db, user_id=user_id, list_id=list_id)


async def create_list(db: Database, *, user_id: int, body: Any) -> dict[str, Any]:
    body = validate_request_body(body, LISTS_TABLE_FIELDS)
    values = _parse_payload(schemas.ListCreate, _pick_updateable(body))

    created = await repository.create_list(db, user_id=user_id, values=values)
    logger.info("list_created list_id=%s user_id=%s", created.get("list_id"), user_id)
    return created


async def update_list(db: Database, *, user_id: int, raw_list_id: str, body: Any) -> dict[str, Any]:
    list_id = parse_list_id(raw_list_id)
    body = validate_request_body(body, LISTS_TABLE_FIELDS)

    patch = _parse_payload(schemas.ListUpdate, _pick_updateable(body))
    patch["modified_on"] = _utc_now()

    updated = await repository.update_list(db, user_id=user_id, list_id=list_id, patch=patch)
    if updated is None:
        raise _not_found(list_id)

    logger.info("list_updated list_id=%s user_id=%s fields=%s", list_id, user_id, sorted(patch))
    return updated


async def delete_list(db: Database, *, user_id: int, raw_list_id: str) -> None:
    list_id = parse_list_id(raw_list_id)

    deleted = await repository.delete_list(db, user_id=user_id, list_id=list_id)
    if deleted != 1:
        raise _not_found(list_id)

    logger.info("list_deleted list_id=%s user_id=%s", list_id, user_id)
