"""
Generic Repository Interface (Protocol)
Contract for all repository implementations
"""
from __future__ import annotations

from typing import Callable, Protocol, Sequence, TypeVar
from uuid import UUID

from devkit.domain import BaseAggregateRoot, Result

TAggregate = TypeVar("TAggregate", bound=BaseAggregateRoot)

Specification = Callable[[TAggregate], bool]


class IRepository(Protocol[TAggregate]):
    """
    Repository interface for aggregate roots.

    Every operation reports expected outcomes (missing entity, duplicate,
    stale concurrency version) as a Result instead of raising.
    """

    async def insert(self, entity: TAggregate) -> Result[TAggregate]:
        """
        Add a new aggregate.

        Returns:
            Success(entity), or a CONFLICT failure if the id already exists
        """
        ...

    async def find_one(self, entity_id: UUID) -> Result[TAggregate]:
        """
        Retrieve an aggregate by id.

        Returns:
            Success(entity), or a NOT_FOUND failure
        """
        ...

    async def find_all(
        self,
        specification: Specification | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Result[Sequence[TAggregate]]:
        ...

    async def update(self, entity: TAggregate) -> Result[TAggregate]:
        """
        Persist changes to an existing aggregate.

        Returns:
            Success(entity) with a rotated concurrency_version, NOT_FOUND when
            missing, CONFLICT when the stored version differs
        """
        ...

    async def delete(self, entity_id: UUID) -> Result[bool]:
        """
        Returns:
            Success(True) when removed, Success(False) when nothing matched
        """
        ...

    async def count(self, specification: Specification | None = None) -> int:
        ...

    async def exists(self, entity_id: UUID) -> bool:
        ...
