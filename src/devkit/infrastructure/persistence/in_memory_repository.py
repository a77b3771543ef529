"""
In-Memory Repository
Dictionary-backed IRepository used by tests and local runs
"""
from __future__ import annotations

import asyncio
import copy
from typing import Generic, Sequence
from uuid import UUID, uuid4

from devkit.domain import Error, Result
from devkit.infrastructure.persistence.repository import Specification, TAggregate
from devkit.logging import get_logger

logger = get_logger(__name__)


class InMemoryRepository(Generic[TAggregate]):
    """
    Stores detached copies of aggregates keyed by id.

    Callers always work on their own copy, so optimistic concurrency behaves
    as it would against a real store: an update made from a stale copy is
    rejected with CONFLICT. Pending domain events are never stored.
    """

    def __init__(self) -> None:
        self._items: dict[UUID, TAggregate] = {}
        self._lock = asyncio.Lock()

    @property
    def entity_name(self) -> str:
        return "Entity"

    async def insert(self, entity: TAggregate) -> Result[TAggregate]:
        async with self._lock:
            if entity.id in self._items:
                return Result.failure(Error.conflict(f"{self.entity_name} {entity.id} already exists"))
            self._items[entity.id] = self._detach(entity)
        logger.debug("Entity inserted", entity=self.entity_name, entity_id=str(entity.id))
        return Result.success(entity)

    async def find_one(self, entity_id: UUID) -> Result[TAggregate]:
        stored = self._items.get(entity_id)
        if stored is None:
            return Result.failure(Error.not_found(f"{self.entity_name} {entity_id} not found"))
        return Result.success(self._detach(stored))

    async def find_all(
        self,
        specification: Specification | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Result[Sequence[TAggregate]]:
        matches = [item for item in self._items.values() if specification is None or specification(item)]
        matches.sort(key=lambda item: item.created_at)
        end = None if limit is None else skip + limit
        return Result.success([self._detach(item) for item in matches[skip:end]])

    async def update(self, entity: TAggregate) -> Result[TAggregate]:
        async with self._lock:
            stored = self._items.get(entity.id)
            if stored is None:
                return Result.failure(Error.not_found(f"{self.entity_name} {entity.id} not found"))
            if stored.concurrency_version != entity.concurrency_version:
                logger.info("Concurrency conflict", entity=self.entity_name, entity_id=str(entity.id))
                return Result.failure(
                    Error.conflict(f"{self.entity_name} {entity.id} was modified by someone else")
                )
            entity.concurrency_version = uuid4()
            self._items[entity.id] = self._detach(entity)
        logger.debug("Entity updated", entity=self.entity_name, entity_id=str(entity.id))
        return Result.success(entity)

    async def delete(self, entity_id: UUID) -> Result[bool]:
        async with self._lock:
            removed = self._items.pop(entity_id, None) is not None
        if removed:
            logger.debug("Entity deleted", entity=self.entity_name, entity_id=str(entity_id))
        return Result.success(removed)

    async def count(self, specification: Specification | None = None) -> int:
        return sum(1 for item in self._items.values() if specification is None or specification(item))

    async def exists(self, entity_id: UUID) -> bool:
        return entity_id in self._items

    @staticmethod
    def _detach(entity: TAggregate) -> TAggregate:
        clone = copy.deepcopy(entity)
        clone.collect_domain_events()
        return clone
