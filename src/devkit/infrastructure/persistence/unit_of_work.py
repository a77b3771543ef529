"""
Unit of Work
Tracks aggregates touched by a use case and publishes their events on commit
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from devkit.domain import BaseAggregateRoot, DomainEvent
from devkit.infrastructure.messaging.domain_event_publisher import DomainEventPublisher
from devkit.infrastructure.messaging.event_bus import EventBus
from devkit.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class IUnitOfWork(Protocol):
    """
    Unit of Work interface.

    Usage:
        async with uow:
            customer = (await repository.find_one(customer_id)).value
            customer.change_name("Jane", "Doe")
            await repository.update(customer)
            uow.track(customer)
            events = await uow.commit()
    """

    async def __aenter__(self) -> IUnitOfWork:
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Roll back when the block raised."""
        ...

    def track(self, aggregate: BaseAggregateRoot) -> None:
        ...

    async def commit(self) -> list[DomainEvent]:
        """
        Publish the pending events of every tracked aggregate.

        Returns:
            The events drained and published, in tracking order
        """
        ...

    async def rollback(self) -> None:
        """Discard tracked aggregates and their pending events."""
        ...


class InMemoryUnitOfWork:
    """IUnitOfWork for the in-memory repositories."""

    def __init__(self, event_bus: EventBus) -> None:
        self._publisher = DomainEventPublisher(event_bus)
        self._tracked: list[BaseAggregateRoot] = []

    async def __aenter__(self) -> InMemoryUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()

    def track(self, aggregate: BaseAggregateRoot) -> None:
        if all(tracked is not aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    async def commit(self) -> list[DomainEvent]:
        tracked, self._tracked = self._tracked, []
        events = await self._publisher.publish_events_from_aggregates(tracked)
        logger.debug("Unit of work committed", aggregates=len(tracked), events=len(events))
        return events

    async def rollback(self) -> None:
        tracked, self._tracked = self._tracked, []
        discarded = sum(len(aggregate.collect_domain_events()) for aggregate in tracked)
        if discarded:
            logger.info("Unit of work rolled back", discarded_events=discarded)
