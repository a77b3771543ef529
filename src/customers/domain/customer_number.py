"""
Customer Number Value Object
Format CUS-YYYY-NNNNNN, e.g. CUS-2024-100000
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Final

from devkit.domain import BaseValueObject, Error, Result, clock

FORMAT_REGEX: Final[re.Pattern[str]] = re.compile(r"^CUS-(\d{4})-(\d{6})$", re.IGNORECASE)
MIN_YEAR: Final[int] = 2000
MIN_SEQUENCE: Final[int] = 100000
MAX_SEQUENCE: Final[int] = 999999
FIELD: Final[str] = "Number"


class CustomerNumber(BaseValueObject):
    """Unique, human readable customer number."""

    def __init__(self, value: str) -> None:
        self._value = value
        self._finalize_init()

    @property
    def value(self) -> str:
        return self._value

    @property
    def year(self) -> int:
        return int(self._value[4:8])

    @property
    def sequence(self) -> int:
        return int(self._value[9:])

    @classmethod
    def create(cls, value: str | None) -> Result[CustomerNumber]:
        """Parse an existing number (case-insensitive, surrounding whitespace ignored)."""
        normalized = (value or "").strip().upper()
        return (
            Result.ok()
            .ensure(lambda _: bool(normalized), Error.validation("Customer number cannot be empty.", FIELD))
            .ensure(
                lambda _: FORMAT_REGEX.match(normalized) is not None,
                Error.validation(
                    "Customer number must match format CUS-YYYY-NNNNNN (e.g., CUS-2024-100000).", FIELD
                ),
            )
            .map(lambda _: cls(normalized))
        )

    @classmethod
    def generate(cls, year: int, sequence: int) -> Result[CustomerNumber]:
        """Build a number from a year (2000..next year) and a six digit sequence."""
        max_year = clock.utcnow().year + 1
        return (
            Result.ok()
            .ensure(
                lambda _: MIN_YEAR <= year <= max_year,
                Error.validation(f"Year out of valid range ({MIN_YEAR}-{max_year}).", FIELD),
            )
            .ensure(
                lambda _: MIN_SEQUENCE <= sequence <= MAX_SEQUENCE,
                Error.validation(f"Sequence must be between {MIN_SEQUENCE} and {MAX_SEQUENCE}.", FIELD),
            )
            .map(lambda _: cls(f"CUS-{year:04d}-{sequence:06d}"))
        )

    @classmethod
    def from_date(cls, moment: date | datetime, sequence: int) -> Result[CustomerNumber]:
        return cls.generate(moment.year, sequence)
