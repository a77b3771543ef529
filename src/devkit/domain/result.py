"""
Result Monad for Domain Operations
Represents success or failure without exceptions
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, TypeVar

from devkit.domain.errors import Error, ErrorKind, as_error
from devkit.domain.exceptions import ResultValueError

T = TypeVar("T")
U = TypeVar("U")

ErrorLike = Error | str


def _collect_errors(errors: Iterable[Any]) -> tuple[Error, ...]:
    collected: list[Error] = []
    for item in errors:
        if isinstance(item, (Error, str)):
            collected.append(as_error(item))
        elif isinstance(item, Iterable):
            collected.extend(_collect_errors(item))
        else:
            raise TypeError(f"Expected Error, str or an iterable of them, got {type(item).__name__}")
    return tuple(collected)


class Result(ABC, Generic[T]):
    """
    Outcome of an operation: a value on success, one or more errors on failure.

    Results are immutable. Every combinator returns a new Result (or the same
    failure instance) and never turns a failure into a success. Combinators
    only invoke their continuation on success, so a chain short-circuits on
    the first failure:

        EmailAddress.create(raw)
            .ensure(lambda e: not e.value.endswith(".test"), "Test domains are not allowed")
            .map(str)
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @staticmethod
    def success(value: T = None) -> Result[T]:  # type: ignore[assignment]
        return Success(value)

    @staticmethod
    def ok() -> Result[None]:
        """Valueless success."""
        return Success(None)

    @staticmethod
    def failure(*errors: ErrorLike | Iterable[ErrorLike]) -> Result[Any]:
        return Failure(_collect_errors(errors))

    @staticmethod
    def attempt(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Result[Any]:
        """
        Call func and translate any raised Exception into an UNEXPECTED failure.

        A Result returned by func is passed through as is; any other return
        value becomes a success.
        """
        try:
            outcome = func(*args, **kwargs)
        except Exception as exc:
            return Failure((Error.from_exception(exc),))
        return outcome if isinstance(outcome, Result) else Success(outcome)

    @staticmethod
    async def attempt_async(func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Result[Any]:
        """Async counterpart of attempt(). Cancellation is never swallowed."""
        try:
            outcome = await func(*args, **kwargs)
        except Exception as exc:
            return Failure((Error.from_exception(exc),))
        return outcome if isinstance(outcome, Result) else Success(outcome)

    @staticmethod
    def combine(*results: Result[Any]) -> Result[tuple[Any, ...]]:
        """
        Merge several results.

        Success with the tuple of values when all succeed; otherwise a failure
        carrying every error of every failed input, in order.
        """
        errors = tuple(error for r in results for error in r.errors)
        if errors:
            return Failure(errors)
        return Success(tuple(r.value for r in results))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @abstractmethod
    def is_success(self) -> bool:
        ...

    def is_failure(self) -> bool:
        return not self.is_success()

    @property
    @abstractmethod
    def value(self) -> T:
        ...

    @property
    @abstractmethod
    def errors(self) -> tuple[Error, ...]:
        ...

    @property
    def error(self) -> Error | None:
        """First error, or None on success."""
        return self.errors[0] if self.errors else None

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(e.message for e in self.errors)

    def has_error_kind(self, kind: ErrorKind) -> bool:
        return any(e.kind is kind for e in self.errors)

    # ------------------------------------------------------------------
    # Synchronous combinators
    # ------------------------------------------------------------------

    def ensure(self, predicate: Callable[[T], bool], error: ErrorLike) -> Result[T]:
        """Fail with error unless predicate(value) holds."""
        if self.is_failure():
            return self
        if predicate(self.value):
            return self
        return Failure((as_error(error),))

    def unless(self, predicate: Callable[[T], Any], error: ErrorLike | None = None) -> Result[T]:
        """
        Fail when predicate(value) is true.

        The predicate may also return a Result (e.g. a rule check); its
        errors are propagated when it failed.
        """
        if self.is_failure():
            return self
        return self._guard(predicate(self.value), error)

    def bind(self, func: Callable[[T], Result[U]]) -> Result[U]:
        if self.is_failure():
            return self  # type: ignore[return-value]
        return self._expect_result(func(self.value), func)

    def map(self, func: Callable[[T], U]) -> Result[U]:
        if self.is_failure():
            return self  # type: ignore[return-value]
        return Success(func(self.value))

    def tap(self, func: Callable[[T], Any]) -> Result[T]:
        if self.is_success():
            func(self.value)
        return self

    def tap_error(self, func: Callable[[tuple[Error, ...]], Any]) -> Result[T]:
        if self.is_failure():
            func(self.errors)
        return self

    def map_error(self, func: Callable[[Error], Error]) -> Result[T]:
        if self.is_success():
            return self
        return Failure(tuple(func(e) for e in self.errors))

    def match(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[tuple[Error, ...]], U],
    ) -> U:
        if self.is_success():
            return on_success(self.value)
        return on_failure(self.errors)

    def or_else(self, default: T) -> T:
        return self.value if self.is_success() else default

    def unwrap(self) -> T:
        return self.value

    def with_error(self, error: ErrorLike) -> Result[T]:
        """New failure carrying the current errors plus error."""
        return Failure(self.errors + (as_error(error),))

    # ------------------------------------------------------------------
    # Asynchronous combinators
    # ------------------------------------------------------------------

    async def ensure_async(self, predicate: Callable[[T], Awaitable[bool]], error: ErrorLike) -> Result[T]:
        if self.is_failure():
            return self
        if await predicate(self.value):
            return self
        return Failure((as_error(error),))

    async def unless_async(
        self,
        predicate: Callable[[T], Awaitable[Any]],
        error: ErrorLike | None = None,
    ) -> Result[T]:
        if self.is_failure():
            return self
        return self._guard(await predicate(self.value), error)

    async def bind_async(self, func: Callable[[T], Awaitable[Result[U]]]) -> Result[U]:
        if self.is_failure():
            return self  # type: ignore[return-value]
        return self._expect_result(await func(self.value), func)

    async def map_async(self, func: Callable[[T], Awaitable[U]]) -> Result[U]:
        if self.is_failure():
            return self  # type: ignore[return-value]
        return Success(await func(self.value))

    async def tap_async(self, func: Callable[[T], Awaitable[Any]]) -> Result[T]:
        if self.is_success():
            await func(self.value)
        return self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _guard(self, outcome: Any, error: ErrorLike | None) -> Result[T]:
        if isinstance(outcome, Result):
            return self if outcome.is_success() else Failure(outcome.errors)
        if not outcome:
            return self
        if error is None:
            raise TypeError("unless() with a boolean predicate requires an error")
        return Failure((as_error(error),))

    @staticmethod
    def _expect_result(outcome: Any, func: Callable[..., Any]) -> Result[Any]:
        if not isinstance(outcome, Result):
            name = getattr(func, "__name__", repr(func))
            raise TypeError(f"bind continuation {name} must return a Result, got {type(outcome).__name__}")
        return outcome


@dataclass(frozen=True, repr=False)
class Success(Result[T]):
    """
    Represents a successful operation result.

    Attributes:
        _value: The successful result value
    """

    _value: T = None  # type: ignore[assignment]

    def is_success(self) -> bool:
        return True

    @property
    def value(self) -> T:
        return self._value

    @property
    def errors(self) -> tuple[Error, ...]:
        return ()

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


@dataclass(frozen=True, repr=False)
class Failure(Result[Any]):
    """
    Represents a failed operation result.

    Attributes:
        _errors: One or more errors, in insertion order
    """

    _errors: tuple[Error, ...]

    def __post_init__(self) -> None:
        raw = self._errors
        errors = _collect_errors((raw,) if isinstance(raw, (Error, str)) else raw)
        if not errors:
            raise ValueError("A failed result requires at least one error")
        object.__setattr__(self, "_errors", errors)

    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> Any:
        raise ResultValueError(self._errors)

    @property
    def errors(self) -> tuple[Error, ...]:
        return self._errors

    def __repr__(self) -> str:
        return f"Failure({', '.join(repr(e) for e in self._errors)})"
