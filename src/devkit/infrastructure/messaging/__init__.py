from devkit.infrastructure.messaging.domain_event_publisher import DomainEventPublisher
from devkit.infrastructure.messaging.event_bus import EventBus, get_event_bus

__all__ = ["EventBus", "get_event_bus", "DomainEventPublisher"]
