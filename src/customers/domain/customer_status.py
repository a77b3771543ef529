"""Customer status enumeration."""
from __future__ import annotations

from enum import Enum

from devkit.domain import Error, Result


class CustomerStatus(Enum):
    """Lifecycle status of a customer. LEAD is the default."""

    LEAD = (1, True, "Lead customer")
    ACTIVE = (2, True, "Active customer")
    RETIRED = (3, True, "Retired customer")

    def __init__(self, id: int, enabled: bool, description: str) -> None:
        self.id = id
        self.enabled = enabled
        self.description = description

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_id(cls, id: int) -> Result[CustomerStatus]:
        for status in cls:
            if status.id == id:
                return Result.success(status)
        return Result.failure(Error.validation(f"Unknown customer status id {id}", "Status"))

    @classmethod
    def from_name(cls, name: str | None) -> Result[CustomerStatus]:
        key = (name or "").strip().upper()
        if key in cls.__members__:
            return Result.success(cls[key])
        return Result.failure(Error.validation(f"Unknown customer status {name!r}", "Status"))

    def __str__(self) -> str:
        return self.display_name
