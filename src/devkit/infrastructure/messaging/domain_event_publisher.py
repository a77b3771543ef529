"""
Domain Event Publisher
Drains events from aggregates and hands them to the event bus
"""
from __future__ import annotations

from typing import Iterable

from devkit.domain import BaseAggregateRoot, DomainEvent
from devkit.infrastructure.messaging.event_bus import EventBus
from devkit.logging import get_logger

logger = get_logger(__name__)


class DomainEventPublisher:
    """
    Publishes the pending events of aggregates after persistence.

    Draining happens before delivery, so an aggregate never publishes the
    same event twice even if a handler fails.
    """

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus

    async def publish_events_from_aggregate(self, aggregate: BaseAggregateRoot) -> list[DomainEvent]:
        events = aggregate.collect_domain_events()
        if not events:
            return []

        logger.info(
            "Publishing events from aggregate",
            aggregate_id=str(aggregate.id),
            aggregate_type=aggregate.__class__.__name__,
            event_count=len(events),
        )
        await self._event_bus.publish_many(events)
        return events

    async def publish_events_from_aggregates(self, aggregates: Iterable[BaseAggregateRoot]) -> list[DomainEvent]:
        published: list[DomainEvent] = []
        for aggregate in aggregates:
            published.extend(await self.publish_events_from_aggregate(aggregate))
        return published
