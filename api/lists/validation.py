"""
Request checks that run before any SQL is issued.
"""

from __future__ import annotations

from typing import Any

from core.errors import ApiError

from .fields import TableField, field_names

MAX_LIST_ID = 2**31 - 1


def validate_request_body(body: Any, fields: tuple[TableField, ...]) -> dict[str, Any]:
    """
    Ensure every key of `body` is a declared column of the target table.

    Unknown keys are rejected with a 400, never dropped. The body itself is
    returned untouched.
    """
    if not isinstance(body, dict):
        raise ApiError(400, "Request body must be a JSON object.")

    unknown = sorted(set(body) - field_names(fields))
    if unknown:
        raise ApiError(400, f"Invalid field(s) in request body: {', '.join(unknown)}.")
    return body


def parse_list_id(raw: str) -> int:
    """
    Parse a `list_id` path segment.

    Only plain ASCII digits within the `serial` (int4) range are accepted.
    """
    value = (raw or "").strip()
    if not (value.isascii() and value.isdecimal()):
        raise ApiError(400, "Invalid list id.")

    list_id = int(value)
    if list_id > MAX_LIST_ID:
        raise ApiError(400, "Invalid list id.")
    return list_id
