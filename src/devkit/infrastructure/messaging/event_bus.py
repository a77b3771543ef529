"""
Domain Event Bus
In-memory event bus for publishing and subscribing to domain events
"""
from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from typing import Any, Awaitable, Callable, Union

from devkit.domain import DomainEvent
from devkit.logging import get_logger

logger = get_logger(__name__)

EventHandler = Callable[[DomainEvent], Union[Awaitable[Any], Any]]


def _event_type_name(event_type: str | type[DomainEvent]) -> str:
    return event_type if isinstance(event_type, str) else event_type.__name__


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or handler.__class__.__name__


class EventBus:
    """
    In-memory event bus for domain event publication and subscription.

    Handlers subscribe to an event class (or its name) and are awaited in
    subscription order. A failing or timed out handler is logged and does
    not stop delivery to the remaining handlers.

    Attributes:
        _handlers: Dictionary mapping event type names to handler lists
        handler_timeout: Seconds a single handler may run (None disables it)
    """

    def __init__(self, handler_timeout: float | None = None) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self.handler_timeout = handler_timeout

    def subscribe(self, event_type: str | type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Example:
            async def on_customer_created(event: CustomerCreatedDomainEvent) -> None:
                ...

            event_bus.subscribe(CustomerCreatedDomainEvent, on_customer_created)
        """
        name = _event_type_name(event_type)
        self._handlers[name].append(handler)
        logger.debug("Handler subscribed", event_type=name, handler=_handler_name(handler))

    def unsubscribe(self, event_type: str | type[DomainEvent], handler: EventHandler) -> None:
        name = _event_type_name(event_type)
        if handler in self._handlers.get(name, []):
            self._handlers[name].remove(handler)
            logger.debug("Handler unsubscribed", event_type=name, handler=_handler_name(handler))

    def handlers_for(self, event_type: str | type[DomainEvent]) -> tuple[EventHandler, ...]:
        return tuple(self._handlers.get(_event_type_name(event_type), ()))

    async def publish(self, event: DomainEvent) -> None:
        """Publish a domain event to all subscribed handlers."""
        event_type = event.event_type
        handlers = self.handlers_for(event_type)

        if not handlers:
            logger.debug("No handlers for event", event_type=event_type, event_id=str(event.event_id))
            return

        logger.info(
            "Publishing event",
            event_type=event_type,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        for handler in handlers:
            try:
                outcome = handler(event)
                if inspect.isawaitable(outcome):
                    await asyncio.wait_for(outcome, timeout=self.handler_timeout)
            except asyncio.TimeoutError:
                logger.error(
                    "Event handler timed out",
                    handler=_handler_name(handler),
                    event_type=event_type,
                    event_id=str(event.event_id),
                    timeout_seconds=self.handler_timeout,
                )
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    handler=_handler_name(handler),
                    event_type=event_type,
                    event_id=str(event.event_id),
                    error=str(e),
                    exc_info=True,
                )

    async def publish_many(self, events: list[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)

    def clear_handlers(self, event_type: str | type[DomainEvent] | None = None) -> None:
        """Clear all handlers for an event type, or all handlers."""
        if event_type:
            self._handlers.pop(_event_type_name(event_type), None)
        else:
            self._handlers.clear()


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Process-wide event bus, created on first use with the configured handler timeout."""
    global _event_bus
    if _event_bus is None:
        from devkit.config import get_settings

        _event_bus = EventBus(handler_timeout=get_settings().event_handler_timeout_seconds)
    return _event_bus
