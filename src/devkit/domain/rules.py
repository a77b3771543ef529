"""
Business Rules
Composable predicates with attached failure errors, checked as a Result
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sized
from datetime import date, datetime, timezone
from typing import Any, Callable, Final

from devkit.domain import clock
from devkit.domain.errors import Error, ErrorKind, as_error
from devkit.domain.result import Result

EMAIL_REGEX: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class Rule(ABC):
    """
    A single business rule.

    Subclasses implement is_satisfied(); evaluating a rule must not change
    any state. Override evaluate() when a rule needs to surface errors other
    than its own (e.g. a collaborator failure).

    Attributes:
        message: Failure message surfaced when the rule is broken
        field: Optional field tag for the failure
        kind: Error kind of the failure (VALIDATION unless overridden)
    """

    message: str = "Rule not satisfied"
    field: str | None = None
    kind: ErrorKind = ErrorKind.VALIDATION

    @abstractmethod
    def is_satisfied(self) -> bool:
        ...

    @property
    def error(self) -> Error:
        return Error(self.kind, self.message, self.field)

    def evaluate(self) -> Result[None]:
        return Result.ok() if self.is_satisfied() else Result.failure(self.error)

    async def evaluate_async(self) -> Result[None]:
        return self.evaluate()

    @staticmethod
    def add(rule: Rule | Callable[[], bool] | bool, error: Error | str | None = None) -> Rules:
        """Start a rule chain: Rule.add(...).add(...).check()"""
        return Rules().add(rule, error)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class PredicateRule(Rule):
    """Rule backed by a zero-argument predicate."""

    def __init__(self, predicate: Callable[[], bool], error: Error | str) -> None:
        self._predicate = predicate
        err = as_error(error)
        self.message = err.message
        self.field = err.field
        self.kind = err.kind

    def is_satisfied(self) -> bool:
        return bool(self._predicate())


class AsyncRule(Rule):
    """
    Rule whose check needs I/O (e.g. a uniqueness query against a store).

    Only usable through Rules.check_async(); a synchronous check is a
    programmer error.
    """

    def is_satisfied(self) -> bool:
        raise TypeError(f"{self.__class__.__name__} is asynchronous; use check_async()")

    @abstractmethod
    async def is_satisfied_async(self) -> bool:
        ...

    def evaluate(self) -> Result[None]:
        raise TypeError(f"{self.__class__.__name__} is asynchronous; use check_async()")

    async def evaluate_async(self) -> Result[None]:
        return Result.ok() if await self.is_satisfied_async() else Result.failure(self.error)


class Rules:
    """
    Ordered AND-composition of rules.

    check() and check_async() stop at the first broken rule and surface its
    error; check_all() evaluates every rule and reports all broken ones.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    def add(self, rule: Rule | Callable[[], bool] | bool, error: Error | str | None = None) -> Rules:
        self._rules.append(self._coerce(rule, error))
        return self

    def check(self) -> Result[None]:
        for rule in self._rules:
            outcome = rule.evaluate()
            if outcome.is_failure():
                return outcome
        return Result.ok()

    def check_all(self) -> Result[None]:
        return Result.combine(*(rule.evaluate() for rule in self._rules)).map(lambda _: None)

    async def check_async(self) -> Result[None]:
        for rule in self._rules:
            outcome = await rule.evaluate_async()
            if outcome.is_failure():
                return outcome
        return Result.ok()

    async def check_all_async(self) -> Result[None]:
        outcomes = [await rule.evaluate_async() for rule in self._rules]
        return Result.combine(*outcomes).map(lambda _: None)

    def is_satisfied(self) -> bool:
        return self.check().is_success()

    def __len__(self) -> int:
        return len(self._rules)

    @staticmethod
    def _coerce(rule: Rule | Callable[[], bool] | bool, error: Error | str | None) -> Rule:
        if isinstance(rule, Rule):
            if error is not None:
                return PredicateRule(rule.is_satisfied, error)
            return rule
        if isinstance(rule, bool):
            outcome = rule
            return PredicateRule(lambda: outcome, error or "Rule not satisfied")
        if callable(rule):
            return PredicateRule(rule, error or "Rule not satisfied")
        raise TypeError(f"Cannot build a rule from {type(rule).__name__}")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class RuleSet:
    """Reusable named rules for Rule.add(...) or Result.ensure(...)."""

    @staticmethod
    def is_not_null(value: Any, field: str | None = None) -> Rule:
        return PredicateRule(lambda: value is not None, Error.validation("Value must not be null", field))

    @staticmethod
    def is_not_empty(value: Any, field: str | None = None) -> Rule:
        return PredicateRule(lambda: not _is_empty(value), Error.validation("Value must not be empty", field))

    @staticmethod
    def equal(value: Any, other: Any, field: str | None = None) -> Rule:
        return PredicateRule(lambda: value == other, Error.validation(f"Value must be equal to {other!r}", field))

    @staticmethod
    def not_equal(value: Any, other: Any, field: str | None = None) -> Rule:
        return PredicateRule(lambda: value != other, Error.validation(f"Value must not be equal to {other!r}", field))

    @staticmethod
    def greater_than(value: Any, threshold: Any, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and value > threshold,
            Error.validation(f"Value must be greater than {threshold}", field),
        )

    @staticmethod
    def greater_than_or_equal(value: Any, threshold: Any, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and value >= threshold,
            Error.validation(f"Value must be greater than or equal to {threshold}", field),
        )

    @staticmethod
    def less_than(value: Any, threshold: Any, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and value < threshold,
            Error.validation(f"Value must be less than {threshold}", field),
        )

    @staticmethod
    def less_than_or_equal(value: Any, threshold: Any, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and value <= threshold,
            Error.validation(f"Value must be less than or equal to {threshold}", field),
        )

    @staticmethod
    def is_in_range(value: Any, minimum: Any, maximum: Any, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and minimum <= value <= maximum,
            Error.validation(f"Value must be between {minimum} and {maximum}", field),
        )

    @staticmethod
    def has_min_length(value: Sized | None, length: int, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and len(value) >= length,
            Error.validation(f"Value must be at least {length} characters long", field),
        )

    @staticmethod
    def has_max_length(value: Sized | None, length: int, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is None or len(value) <= length,
            Error.validation(f"Value must be at most {length} characters long", field),
        )

    @staticmethod
    def contains(value: str | None, fragment: str, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and fragment in value,
            Error.validation(f"Value must contain {fragment!r}", field),
        )

    @staticmethod
    def matches(value: str | None, pattern: str | re.Pattern[str], field: str | None = None) -> Rule:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return PredicateRule(
            lambda: value is not None and regex.fullmatch(value) is not None,
            Error.validation("Value has an invalid format", field),
        )

    @staticmethod
    def is_valid_email(value: str | None, field: str | None = None) -> Rule:
        return PredicateRule(
            lambda: value is not None and EMAIL_REGEX.match(value) is not None,
            Error.validation("Invalid email address", field),
        )

    @staticmethod
    def is_not_in_future(value: date | datetime | None, field: str | None = None) -> Rule:
        def _check() -> bool:
            if value is None:
                return True
            if isinstance(value, datetime):
                moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
                return moment <= clock.utcnow()
            return value <= clock.today()

        return PredicateRule(_check, Error.validation("Date must not be in the future", field))
