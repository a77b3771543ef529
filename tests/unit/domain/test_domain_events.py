from dataclasses import dataclass
from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from devkit.domain import DomainEvent, DomainEventRegistry, clock


@dataclass(frozen=True, kw_only=True)
class Shipped(DomainEvent):
    order_id: object
    shipped_on: date


def test_event_envelope_and_payload():
    moment = datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)
    order_id = uuid4()
    with clock.frozen_clock(moment):
        event = Shipped(order_id=order_id, shipped_on=date(2024, 3, 1))

    data = event.to_dict()
    assert data["event_type"] == "Shipped"
    assert data["occurred_at"] == moment.isoformat()
    assert data["data"] == {"order_id": str(order_id), "shipped_on": "2024-03-01"}


def test_events_are_immutable():
    event = Shipped(order_id=1, shipped_on=date.today())
    with pytest.raises(AttributeError):
        event.order_id = 2


def test_registry_is_append_only_and_drains():
    registry = DomainEventRegistry()
    first = Shipped(order_id=1, shipped_on=date.today())
    second = Shipped(order_id=2, shipped_on=date.today())
    registry.register(first).register(second)

    assert registry.snapshot() == (first, second)
    assert registry.of_type(Shipped) == (first, second)
    assert registry.drain() == [first, second]
    assert len(registry) == 0 and not registry


def test_registry_rejects_non_events():
    with pytest.raises(TypeError):
        DomainEventRegistry().register("not an event")
