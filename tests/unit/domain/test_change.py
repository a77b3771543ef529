import copy
from dataclasses import dataclass

import pytest

from devkit.domain import (
    BaseAggregateRoot,
    BaseEntity,
    ChangeAlreadyAppliedError,
    DomainEvent,
    Error,
    ErrorKind,
    Result,
)


@dataclass(frozen=True, kw_only=True)
class Renamed(DomainEvent):
    name: str


class Line(BaseEntity):
    def __init__(self, sku, **kwargs):
        super().__init__(**kwargs)
        self.sku = sku


class Order(BaseAggregateRoot):
    def __init__(self, name="draft", **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.note = None
        self.lines = []


def _state(order):
    return (order.name, order.note, [line.id for line in order.lines], order.updated_at, len(order.domain_events))


def test_successful_apply_writes_and_registers_events():
    order = Order()
    result = (
        order.change()
        .ensure(lambda o: o.name == "draft", "must be draft")
        .set("name", "final")
        .register(lambda o: Renamed(name=o.name))
        .apply()
    )
    assert result.value is order
    assert order.name == "final"
    (event,) = order.domain_events
    assert event.name == "final"
    assert event.aggregate_id == order.id
    assert event.aggregate_type == "Order"


def test_failed_guard_leaves_aggregate_untouched():
    order = Order()
    order.lines.append(Line("A"))
    before = copy.deepcopy(_state(order))

    result = (
        order.change()
        .set("name", "changed")
        .add("lines", Line("B"))
        .ensure(lambda o: False, Error.validation("nope", "Name"))
        .register(Renamed(name="x"))
        .apply()
    )
    assert result.errors == (Error.validation("nope", "Name"),)
    assert _state(order) == before


def test_guards_after_a_failure_are_not_evaluated():
    calls = []

    def tracked(_):
        calls.append(1)
        return True

    order = Order()
    result = order.change().ensure(lambda o: True, "a").ensure(lambda o: False, "b").ensure(tracked, "c").set("name", "x").apply()
    assert result.messages == ("b",)
    assert calls == []
    assert order.name == "draft"


def test_when_false_skips_everything():
    order = Order()
    result = order.change().when(lambda o: False).set("name", "x").register(Renamed(name="x")).apply()
    assert result.is_success()
    assert order.name == "draft"
    assert not order.has_domain_events


def test_setting_the_current_value_keeps_timestamp_but_registers_events():
    order = Order()
    stamp = order.updated_at
    result = order.change().set("name", "draft").register(Renamed(name="draft")).apply()
    assert result.is_success()
    assert order.updated_at == stamp
    assert [event.name for event in order.domain_events] == ["draft"]


def test_when_gates_events_on_an_effective_change():
    order = Order()
    order.change().when(lambda o: o.name != "draft").set("name", "draft").register(Renamed(name="draft")).apply()
    assert not order.has_domain_events


def test_every_registered_event_is_emitted_in_order():
    order = Order()
    order.change().set("name", "final").register(Renamed(name="a")).register(lambda o: Renamed(name=o.name)).apply()
    assert [event.name for event in order.domain_events] == ["a", "final"]


def test_raising_event_factory_undoes_the_writes():
    order = Order()
    stamp = order.updated_at

    def explode(_):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        (
            order.change()
            .set("name", "final")
            .add("lines", Line("A"))
            .register(Renamed(name="first"))
            .register(explode)
            .apply()
        )
    assert order.name == "draft"
    assert order.lines == []
    assert order.updated_at == stamp
    assert not order.has_domain_events


def test_pipeline_without_writes_registers_events():
    order = Order()
    order.change().register(Renamed(name="ping")).apply()
    assert len(order.domain_events) == 1


def test_set_unwraps_results():
    order = Order()
    order.change().set("note", Result.success("hello")).apply()
    assert order.note == "hello"

    failed = order.change().set("note", Result.failure(Error.validation("bad", "Note"))).apply()
    assert failed.error.field == "Note"
    assert order.note == "hello"


def test_set_unknown_attribute_raises():
    with pytest.raises(AttributeError):
        Order().change().set("missing", 1)


def test_unless_with_result_predicate():
    order = Order()
    result = order.change().unless(lambda o: Result.failure(Error.conflict("taken"))).set("name", "x").apply()
    assert result.error.kind is ErrorKind.CONFLICT
    assert order.name == "draft"


def test_add_accepts_factories_and_results():
    order = Order()
    order.change().add("lines", lambda o: Line("A")).add("lines", Result.success(Line("B"))).apply()
    assert [line.sku for line in order.lines] == ["A", "B"]

    failed = order.change().add("lines", Result.failure("no line")).apply()
    assert failed.is_failure()
    assert len(order.lines) == 2


def test_remove_by_id():
    order = Order()
    line = Line("A")
    order.lines.append(line)

    missing = order.change().remove_by_id("lines", "nope").apply()
    assert missing.error.kind is ErrorKind.NOT_FOUND

    twice = order.change().remove_by_id("lines", line.id).remove_by_id("lines", line.id).apply()
    assert twice.is_failure()
    assert order.lines == [line]

    order.change().remove_by_id("lines", line.id).apply()
    assert order.lines == []


def test_execute_counts_as_change_unless_false():
    order = Order()
    stamp = order.updated_at
    order.change().execute(lambda o: False).apply()
    assert order.updated_at == stamp

    order.change().execute(lambda o: setattr(o, "note", "done")).apply()
    assert order.note == "done"
    assert order.updated_at >= stamp


def test_writes_are_undone_when_a_later_write_raises():
    order = Order()

    def explode(_):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        order.change().set("name", "x").add("lines", Line("A")).execute(explode).apply()
    assert order.name == "draft"
    assert order.lines == []


def test_pipeline_is_single_use():
    change = Order().change().set("name", "x")
    change.apply()
    with pytest.raises(ChangeAlreadyAppliedError):
        change.set("name", "y")
    with pytest.raises(ChangeAlreadyAppliedError):
        change.apply()


def test_register_requires_an_event_recording_target():
    with pytest.raises(TypeError):
        Line("A").change().register(Renamed(name="x"))
