"""
Domain Clock
Single source of "now" for the domain so time-dependent rules are testable
"""
from __future__ import annotations

import contextlib
from contextvars import ContextVar
from datetime import date, datetime, timezone
from typing import Callable, Iterator


def _system_utcnow() -> datetime:
    # always tz-aware UTC
    return datetime.now(timezone.utc)


_provider: ContextVar[Callable[[], datetime]] = ContextVar("devkit_clock_provider", default=_system_utcnow)


def utcnow() -> datetime:
    """Current tz-aware UTC timestamp from the active provider."""
    moment = _provider.get()()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def today() -> date:
    return utcnow().date()


@contextlib.contextmanager
def frozen_clock(moment: datetime) -> Iterator[datetime]:
    """
    Pin the clock to a fixed moment for the duration of the block.

    Usage:
        with frozen_clock(datetime(2026, 1, 1, tzinfo=timezone.utc)):
            CustomerNumber.generate(2027, 100000)
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    token = _provider.set(lambda: moment)
    try:
        yield moment
    finally:
        _provider.reset(token)
