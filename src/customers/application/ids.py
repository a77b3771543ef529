"""Identifier parsing for incoming commands and queries."""
from __future__ import annotations

from uuid import UUID

from devkit.domain import Error, Result


def parse_id(value: str | UUID | None, field: str = "Id") -> Result[UUID]:
    if isinstance(value, UUID):
        return Result.success(value)
    try:
        return Result.success(UUID(str(value).strip()))
    except (TypeError, ValueError):
        return Result.failure(Error.validation(f"Invalid identifier {value!r}", field))
