import asyncio

import pytest

from devkit.domain import Error, ErrorKind, Failure, Result, ResultValueError, Success

E1 = Error.validation("first")
E2 = Error.validation("second")


def test_success_and_failure_state():
    ok = Result.success(3)
    assert ok.is_success() and not ok.is_failure()
    assert ok.value == 3 and ok.errors == ()

    failed = Result.failure(E1, "plain message")
    assert failed.is_failure()
    assert failed.errors == (E1, Error.validation("plain message"))
    assert failed.error == E1
    assert failed.messages == ("first", "plain message")


def test_failure_value_access_raises():
    with pytest.raises(ResultValueError, match="first"):
        Result.failure(E1).value


def test_failure_requires_an_error():
    with pytest.raises(ValueError):
        Result.failure()
    with pytest.raises(ValueError):
        Failure(())


def test_ok_is_valueless_success():
    assert Result.ok() == Success(None)


def test_bind_laws():
    f = lambda x: Result.success(x * 2)
    assert Result.success(4).bind(f) == f(4)
    failed = Result.failure(E1)
    assert failed.bind(f) is failed
    assert Result.success(4).map(lambda x: x) == Result.success(4)


def test_bind_requires_result():
    with pytest.raises(TypeError):
        Result.success(1).bind(lambda x: x)


def test_ensure_short_circuits():
    calls = []

    def second(_):
        calls.append(1)
        return True

    result = Result.success(1).ensure(lambda _: False, E1).ensure(second, E2)
    assert result.errors == (E1,)
    assert calls == []


def test_unless_accepts_bool_and_result():
    assert Result.success(1).unless(lambda _: True, E1).errors == (E1,)
    assert Result.success(1).unless(lambda _: False, E1).is_success()
    assert Result.success(1).unless(lambda _: Result.failure(E2)).errors == (E2,)
    assert Result.success(1).unless(lambda _: Result.ok()).value == 1
    with pytest.raises(TypeError):
        Result.success(1).unless(lambda _: True)


def test_tap_and_tap_error():
    seen = []
    Result.success(1).tap(seen.append).tap_error(seen.append)
    Result.failure(E1).tap(seen.append).tap_error(seen.append)
    assert seen == [1, (E1,)]


def test_map_error_never_turns_failure_into_success():
    mapped = Result.failure(E1).map_error(lambda e: Error.conflict(e.message))
    assert mapped.is_failure()
    assert mapped.error.kind is ErrorKind.CONFLICT


def test_match_or_else_and_with_error():
    assert Result.success(2).match(lambda v: v + 1, lambda e: 0) == 3
    assert Result.failure(E1).match(lambda v: v, lambda e: len(e)) == 1
    assert Result.failure(E1).or_else(7) == 7
    assert Result.success(1).unwrap() == 1
    assert Result.failure(E1).with_error(E2).errors == (E1, E2)


def test_combine_collects_every_error():
    combined = Result.combine(Result.success(1), Result.failure(E1), Result.failure(E2))
    assert combined.errors == (E1, E2)
    assert Result.combine(Result.success(1), Result.success(2)).value == (1, 2)


def test_attempt_turns_exceptions_into_unexpected():
    def boom():
        raise RuntimeError("db down")

    result = Result.attempt(boom)
    assert result.has_error_kind(ErrorKind.UNEXPECTED)
    assert "db down" in result.error.message
    assert Result.attempt(lambda: 5).value == 5
    assert Result.attempt(lambda: Result.failure(E1)).errors == (E1,)


async def test_async_combinators():
    async def double(x):
        return Result.success(x * 2)

    async def is_positive(x):
        return x > 0

    result = await Result.success(2).bind_async(double)
    result = await result.ensure_async(is_positive, E1)
    result = await result.map_async(lambda x: asyncio.sleep(0, result=x + 1))
    assert result.value == 5


async def test_async_combinators_skip_continuations_on_failure():
    called = []

    async def record(x):
        called.append(x)
        return Result.success(x)

    failed = Result.failure(E1)
    assert await failed.bind_async(record) is failed
    assert await failed.tap_async(record) is failed
    assert await failed.unless_async(record, E2) is failed
    assert called == []


async def test_unless_async_propagates_rule_errors():
    async def check(_):
        return Result.failure(E2)

    result = await Result.success(1).unless_async(check)
    assert result.errors == (E2,)


async def test_cancellation_is_not_swallowed():
    async def cancelled():
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await Result.attempt_async(cancelled)
    with pytest.raises(asyncio.CancelledError):
        await Result.success(1).bind_async(lambda _: cancelled())


async def test_attempt_async_wraps_exceptions():
    async def boom():
        raise KeyError("x")

    result = await Result.attempt_async(boom)
    assert result.has_error_kind(ErrorKind.UNEXPECTED)
