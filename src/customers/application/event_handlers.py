"""
Customer Domain Event Handlers
"""
from __future__ import annotations

from devkit.infrastructure.messaging import EventBus
from devkit.logging import get_logger

from customers.domain.events import (
    CustomerCreatedDomainEvent,
    CustomerDeletedDomainEvent,
    CustomerUpdatedDomainEvent,
)

logger = get_logger(__name__)


async def on_customer_created(event: CustomerCreatedDomainEvent) -> None:
    logger.info(
        "Customer created event handled",
        event_id=str(event.event_id),
        customer_id=str(event.customer_id),
        number=event.number,
        email=event.email,
    )


async def on_customer_updated(event: CustomerUpdatedDomainEvent) -> None:
    logger.info(
        "Customer updated event handled",
        event_id=str(event.event_id),
        customer_id=str(event.customer_id),
        status=event.status,
    )


async def on_customer_deleted(event: CustomerDeletedDomainEvent) -> None:
    logger.info(
        "Customer deleted event handled",
        event_id=str(event.event_id),
        customer_id=str(event.customer_id),
        number=event.number,
    )


def register_event_handlers(event_bus: EventBus) -> None:
    event_bus.subscribe(CustomerCreatedDomainEvent, on_customer_created)
    event_bus.subscribe(CustomerUpdatedDomainEvent, on_customer_updated)
    event_bus.subscribe(CustomerDeletedDomainEvent, on_customer_deleted)
