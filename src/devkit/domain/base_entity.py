"""
Base Entity Contract for Domain Layer
Provides UUID-based identity, equality, and audit fields
"""
from __future__ import annotations

from abc import ABC
from datetime import datetime
from typing import TYPE_CHECKING, TypeVar
from uuid import UUID, uuid4

from devkit.domain import clock

if TYPE_CHECKING:
    from devkit.domain.change import Change

TEntity = TypeVar("TEntity", bound="BaseEntity")


class BaseEntity(ABC):
    """
    Abstract base class for all domain entities.

    Entities are defined by their identity (id), not their attributes.
    Two entities are equal if they have the same id, regardless of other attributes.

    Attributes:
        id: Unique identifier (UUID)
        created_at: Timestamp of creation
        updated_at: Timestamp of last update
    """

    def __init__(
        self,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        self.id: UUID = id or uuid4()
        now = clock.utcnow()
        self.created_at: datetime = created_at or now
        self.updated_at: datetime = updated_at or now

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same id and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__, self.id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    def mark_updated(self) -> None:
        """Update the updated_at timestamp to current time."""
        self.updated_at = clock.utcnow()

    def change(self: TEntity) -> Change[TEntity]:
        """Begin a single-use, validate-then-commit change pipeline."""
        from devkit.domain.change import Change

        return Change(self)
