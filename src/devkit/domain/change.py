"""
Change Pipeline
Validate-then-commit mutation builder bound to one entity instance
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableSequence
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from devkit.domain.domain_event import DomainEvent
from devkit.domain.errors import Error, as_error
from devkit.domain.exceptions import ChangeAlreadyAppliedError
from devkit.domain.result import Failure, Result, Success

if TYPE_CHECKING:
    from devkit.domain.base_entity import BaseEntity

TTarget = TypeVar("TTarget", bound="BaseEntity")

EventSource = DomainEvent | Callable[[Any], DomainEvent]


class _StagedWrite(ABC):
    """A mutation staged by the pipeline, run only by Change.apply()."""

    @abstractmethod
    def run(self, target: Any) -> bool:
        """Perform the write; return True when state actually changed."""

    def undo(self, target: Any) -> None:
        """Revert a write that already ran."""


class _SetAttribute(_StagedWrite):
    _MISSING = object()

    def __init__(self, attribute: str, value: Any) -> None:
        self.attribute = attribute
        self.value = value
        self._previous: Any = self._MISSING

    def run(self, target: Any) -> bool:
        current = getattr(target, self.attribute)
        if current == self.value and type(current) is type(self.value):
            return False
        self._previous = current
        setattr(target, self.attribute, self.value)
        return True

    def undo(self, target: Any) -> None:
        if self._previous is not self._MISSING:
            setattr(target, self.attribute, self._previous)


class _AppendItem(_StagedWrite):
    def __init__(self, collection: str, item: Any) -> None:
        self.collection = collection
        self.item = item
        self._ran = False

    def run(self, target: Any) -> bool:
        getattr(target, self.collection).append(self.item)
        self._ran = True
        return True

    def undo(self, target: Any) -> None:
        if self._ran:
            items = getattr(target, self.collection)
            for index in range(len(items) - 1, -1, -1):
                if items[index] is self.item:
                    del items[index]
                    break


class _RemoveItem(_StagedWrite):
    def __init__(self, collection: str, item: Any) -> None:
        self.collection = collection
        self.item = item
        self._index: int | None = None

    def run(self, target: Any) -> bool:
        items = getattr(target, self.collection)
        for index, candidate in enumerate(items):
            if candidate is self.item:
                del items[index]
                self._index = index
                return True
        return False

    def undo(self, target: Any) -> None:
        if self._index is not None:
            getattr(target, self.collection).insert(self._index, self.item)


class _Execute(_StagedWrite):
    # arbitrary actions cannot be reverted
    def __init__(self, action: Callable[[Any], Any]) -> None:
        self.action = action

    def run(self, target: Any) -> bool:
        outcome = self.action(target)
        return outcome is not False


class Change(Generic[TTarget]):
    """
    Fluent, single-use mutation pipeline for one entity.

    Guards (when/ensure/unless and the lookups done by set/add/remove_by_id)
    run immediately, in declaration order, against the untouched target.
    The first failing guard stops evaluation of every later guard. Writes
    and event registrations are only staged; apply() runs them all when no
    guard failed and none of them otherwise, so a failed apply() leaves the
    target exactly as it was.

        customer.change()
            .ensure(lambda c: bool(first_name), Error.validation("First name is required", "FirstName"))
            .set("first_name", first_name)
            .register(lambda c: CustomerUpdatedDomainEvent.of(c))
            .apply()

    Not thread-safe: a pipeline and its target belong to one unit of work.
    """

    def __init__(self, target: TTarget) -> None:
        self._target = target
        self._errors: list[Error] = []
        self._skipped = False
        self._applied = False
        self._writes: list[_StagedWrite] = []
        self._events: list[EventSource] = []
        self._pending_removals: set[int] = set()

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def when(self, predicate: Callable[[TTarget], bool]) -> Change[TTarget]:
        """Skip the rest of the pipeline (apply() succeeds untouched) when false."""
        if self._active() and not predicate(self._target):
            self._skipped = True
        return self

    def ensure(self, predicate: Callable[[TTarget], bool], error: Error | str) -> Change[TTarget]:
        if self._active() and not predicate(self._target):
            self._errors.append(as_error(error))
        return self

    def unless(self, predicate: Callable[[TTarget], Any], error: Error | str | None = None) -> Change[TTarget]:
        """Fail when predicate is true, or when it returns a failed Result."""
        if not self._active():
            return self
        outcome = predicate(self._target)
        if isinstance(outcome, Result):
            self._errors.extend(outcome.errors)
        elif outcome:
            if error is None:
                raise TypeError("unless() with a boolean predicate requires an error")
            self._errors.append(as_error(error))
        return self

    # ------------------------------------------------------------------
    # Staged writes
    # ------------------------------------------------------------------

    def set(self, attribute: str, value: Any) -> Change[TTarget]:
        """
        Stage an attribute assignment.

        value may be a Result: a failure fails the pipeline with its errors,
        a success is unwrapped. Assigning the current value is a no-op.
        """
        self._ensure_usable()
        if not hasattr(self._target, attribute):
            raise AttributeError(f"{self._target.__class__.__name__} has no attribute {attribute!r}")
        if not self._active():
            return self
        if isinstance(value, Result):
            if value.is_failure():
                self._errors.extend(value.errors)
                return self
            value = value.value
        self._writes.append(_SetAttribute(attribute, value))
        return self

    def add(self, collection: str, item: Any) -> Change[TTarget]:
        """
        Stage an append to an owned collection.

        item may be the item itself, a Result, or a factory taking the target
        and returning either.
        """
        self._collection(collection)
        if not self._active():
            return self
        if callable(item) and not isinstance(item, Result):
            item = item(self._target)
        if isinstance(item, Result):
            if item.is_failure():
                self._errors.extend(item.errors)
                return self
            item = item.value
        self._writes.append(_AppendItem(collection, item))
        return self

    def remove_by_id(self, collection: str, item_id: Any, error: Error | str | None = None) -> Change[TTarget]:
        """Stage removal of the child with the given id; fail if it is missing."""
        items = self._collection(collection)
        if not self._active():
            return self
        match = next(
            (i for i in items if getattr(i, "id", None) == item_id and id(i) not in self._pending_removals),
            None,
        )
        if match is None:
            self._errors.append(
                as_error(error) if error is not None else Error.not_found(f"Item {item_id} not found in {collection}")
            )
            return self
        self._pending_removals.add(id(match))
        self._writes.append(_RemoveItem(collection, match))
        return self

    def execute(self, action: Callable[[TTarget], Any]) -> Change[TTarget]:
        """
        Stage an arbitrary mutation.

        The action counts as a state change (for mark_updated) unless it
        returns False. Unlike set/add/remove_by_id it cannot be reverted if
        a later write or event factory raises.
        """
        if self._active():
            self._writes.append(_Execute(action))
        return self

    def register(self, event: EventSource) -> Change[TTarget]:
        """Stage a domain event (or a factory taking the target) for a successful apply()."""
        self._ensure_usable()
        if not hasattr(self._target, "raise_event"):
            raise TypeError(f"{self._target.__class__.__name__} does not record domain events")
        if self._active():
            self._events.append(event)
        return self

    # ------------------------------------------------------------------
    # Terminal
    # ------------------------------------------------------------------

    @property
    def is_failed(self) -> bool:
        return bool(self._errors)

    def apply(self) -> Result[TTarget]:
        """
        Finalize the pipeline.

        Failure: no writes, no events, Failure(collected errors).
        Success: writes in declaration order, then every staged event, then
        Success(target). Callers that must stay silent on no-op updates gate
        the pipeline with when().
        """
        self._ensure_usable()
        self._applied = True

        if self._errors:
            return Failure(tuple(self._errors))
        if self._skipped:
            return Success(self._target)

        changed, events = self._run()
        for event in events:
            self._target.raise_event(event)  # type: ignore[attr-defined]
        if changed:
            self._target.mark_updated()
        return Success(self._target)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self) -> tuple[bool, list[DomainEvent]]:
        # event factories see the new state; a raising one undoes the writes
        done: list[_StagedWrite] = []
        changed = False
        try:
            for write in self._writes:
                changed = write.run(self._target) or changed
                done.append(write)
            events = [
                source if isinstance(source, DomainEvent) else source(self._target)
                for source in self._events
            ]
        except Exception:
            for write in reversed(done):
                write.undo(self._target)
            raise
        return changed, events

    def _active(self) -> bool:
        self._ensure_usable()
        return not self._errors and not self._skipped

    def _ensure_usable(self) -> None:
        if self._applied:
            raise ChangeAlreadyAppliedError(self._target)

    def _collection(self, name: str) -> MutableSequence[Any]:
        self._ensure_usable()
        items = getattr(self._target, name, None)
        if not isinstance(items, MutableSequence):
            raise AttributeError(
                f"{self._target.__class__.__name__}.{name} is not a mutable collection"
            )
        return items
