"""
Aggregate Root Base Class
Manages domain events and acts as consistency boundary
"""
from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from devkit.domain.base_entity import BaseEntity
from devkit.domain.domain_event import DomainEvent, DomainEventRegistry


class BaseAggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.

    Aggregate roots are entities that serve as the entry point to an aggregate.
    They keep the domain events raised by successful Create/Change operations
    until infrastructure drains them after persistence.

    Aggregates expose a static create(...) returning Result[Self] and
    mutators returning Result[Self]; __init__ is reserved for the factory
    and for persistence rehydration.

    Attributes:
        concurrency_version: Optimistic concurrency token, rotated on each
            successful repository update
    """

    def __init__(self, id: UUID | None = None, **kwargs: Any) -> None:
        super().__init__(id=id, **kwargs)
        self._domain_events = DomainEventRegistry()
        self.concurrency_version: UUID = uuid4()

    @property
    def domain_events(self) -> DomainEventRegistry:
        return self._domain_events

    def raise_event(self, event: DomainEvent) -> None:
        """Record a domain event, enriching it with aggregate context."""
        if event.aggregate_id is None:
            object.__setattr__(event, "aggregate_id", self.id)
        if not event.aggregate_type:
            object.__setattr__(event, "aggregate_type", self.__class__.__name__)
        self._domain_events.register(event)

    def collect_domain_events(self) -> list[DomainEvent]:
        """
        Collect and clear domain events.

        This should be called by infrastructure after persistence
        to publish events via event bus.
        """
        return self._domain_events.drain()

    @property
    def has_domain_events(self) -> bool:
        return bool(self._domain_events)
