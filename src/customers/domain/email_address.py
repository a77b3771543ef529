"""
Email Address Value Object
"""
from __future__ import annotations

from devkit.domain import BaseValueObject, Result, Rule, RuleSet


class EmailAddress(BaseValueObject):
    """
    Email address value object with validation.

    Normalizes to trimmed lowercase before validating the format.
    """

    def __init__(self, value: str) -> None:
        self._value = value
        self._finalize_init()

    @property
    def value(self) -> str:
        return self._value

    @classmethod
    def create(cls, value: str | None) -> Result[EmailAddress]:
        normalized = (value or "").strip().lower()
        return (
            Rule.add(RuleSet.is_not_empty(normalized, field="Email"))
            .add(RuleSet.is_valid_email(normalized, field="Email"))
            .check()
            .map(lambda _: cls(normalized))
        )
