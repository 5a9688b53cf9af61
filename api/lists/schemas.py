"""
Lists API schemas (write payloads).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ListCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class ListUpdate(BaseModel):
    # Partial update: omitted fields keep their stored value.
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("name cannot be null")
        return value
