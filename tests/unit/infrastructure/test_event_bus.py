import asyncio
from dataclasses import dataclass

from devkit.domain import DomainEvent
from devkit.infrastructure.messaging import EventBus


@dataclass(frozen=True, kw_only=True)
class Happened(DomainEvent):
    what: str


async def test_handlers_receive_events_in_subscription_order():
    bus = EventBus()
    seen = []

    async def first(event):
        seen.append(("first", event.what))

    def second(event):
        seen.append(("second", event.what))

    bus.subscribe(Happened, first)
    bus.subscribe("Happened", second)
    await bus.publish(Happened(what="x"))
    assert seen == [("first", "x"), ("second", "x")]


async def test_failing_handler_does_not_stop_delivery():
    bus = EventBus()
    seen = []

    async def broken(event):
        raise RuntimeError("handler bug")

    async def healthy(event):
        seen.append(event.what)

    bus.subscribe(Happened, broken)
    bus.subscribe(Happened, healthy)
    await bus.publish_many([Happened(what="a"), Happened(what="b")])
    assert seen == ["a", "b"]


async def test_slow_handler_times_out():
    bus = EventBus(handler_timeout=0.01)
    seen = []

    async def slow(event):
        await asyncio.sleep(1)

    async def fast(event):
        seen.append(event.what)

    bus.subscribe(Happened, slow)
    bus.subscribe(Happened, fast)
    await bus.publish(Happened(what="a"))
    assert seen == ["a"]


async def test_unsubscribe_and_clear():
    bus = EventBus()

    async def handler(event):
        pass

    bus.subscribe(Happened, handler)
    bus.unsubscribe(Happened, handler)
    assert bus.handlers_for(Happened) == ()

    bus.subscribe(Happened, handler)
    bus.clear_handlers()
    assert bus.handlers_for("Happened") == ()
