"""
Column declarations for the `lists` table.
"""

from __future__ import annotations

from dataclasses import dataclass

LISTS_TABLE = "lists"


@dataclass(frozen=True)
class TableField:
    name: str
    updateable: bool = False


LISTS_TABLE_FIELDS: tuple[TableField, ...] = (
    TableField("list_id"),
    TableField("user_id"),
    TableField("name", updateable=True),
    TableField("description", updateable=True),
    TableField("created_on"),
    TableField("modified_on"),
)


def field_names(fields: tuple[TableField, ...]) -> frozenset[str]:
    return frozenset(f.name for f in fields)


def updateable_fields(fields: tuple[TableField, ...]) -> tuple[str, ...]:
    return tuple(f.name for f in fields if f.updateable)
