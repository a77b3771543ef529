"""
Domain Event Base Class
All domain events inherit from this
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterator
from uuid import UUID, uuid4

from devkit.domain import clock
from devkit.domain.base_value_object import BaseValueObject

_ENVELOPE_FIELDS = ("event_id", "occurred_at", "aggregate_id", "aggregate_type", "event_version")


def _serialize(value: Any) -> Any:
    """JSON-friendly serializer for event payloads."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.name
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _serialize(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, BaseValueObject):
        return str(value)
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events represent something that happened in the domain.
    They are immutable and carry all necessary data.

    Subclasses are frozen, keyword-only dataclasses that add their payload:

        @dataclass(frozen=True, kw_only=True)
        class CustomerCreatedDomainEvent(DomainEvent):
            customer_id: UUID
            email: str

    Attributes:
        event_id: Unique identifier for this event occurrence
        occurred_at: Timestamp when event occurred
        aggregate_id: ID of the aggregate that produced this event
        aggregate_type: Type name of the aggregate
        event_version: Schema version of this event type (for evolution)
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=clock.utcnow)
    aggregate_id: UUID | None = None
    aggregate_type: str = ""
    event_version: int = 1

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def payload(self) -> dict[str, Any]:
        """Event-specific fields (everything beyond the envelope)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in _ENVELOPE_FIELDS
        }

    def to_dict(self) -> dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of event
        """
        data: dict[str, Any] = {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": str(self.aggregate_id) if self.aggregate_id else None,
            "aggregate_type": self.aggregate_type,
            "event_version": self.event_version,
        }
        payload = self.payload()
        if payload:
            data["data"] = _serialize(payload)
        return data


class DomainEventRegistry:
    """
    Append-only list of events pending publication for one aggregate.

    Events leave the registry only through drain(), which the publishing
    side calls once per successful commit.
    """

    __slots__ = ("_events",)

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    def register(self, event: DomainEvent) -> DomainEventRegistry:
        if not isinstance(event, DomainEvent):
            raise TypeError(f"Expected a DomainEvent, got {type(event).__name__}")
        self._events.append(event)
        return self

    def snapshot(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def drain(self) -> list[DomainEvent]:
        """Return all pending events and empty the registry."""
        events, self._events = self._events, []
        return events

    def of_type(self, event_type: type[DomainEvent]) -> tuple[DomainEvent, ...]:
        return tuple(e for e in self._events if isinstance(e, event_type))

    def __iter__(self) -> Iterator[DomainEvent]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)

    def __repr__(self) -> str:
        return f"DomainEventRegistry({[e.event_type for e in self._events]})"
