import asyncio
from dataclasses import dataclass

import pytest
import structlog

from devkit.application import BaseCommand, BaseQuery, CommandHandler, QueryHandler
from devkit.domain import Error, ErrorKind, Result


@dataclass(frozen=True)
class Ping(BaseCommand):
    payload: str


@dataclass(frozen=True)
class Lookup(BaseQuery):
    key: str


class PingHandler(CommandHandler[Ping, str]):
    async def handle(self, command):
        if command.payload == "raise":
            raise ConnectionError("store unavailable")
        if command.payload == "cancel":
            raise asyncio.CancelledError()
        if command.payload == "fail":
            return Result.failure(Error.validation("bad payload", "Payload"))
        return Result.success(command.payload.upper())


class LookupHandler(QueryHandler[Lookup, int]):
    async def handle(self, query):
        if query.key == "raise":
            raise LookupError(query.key)
        return Result.success(len(query.key))


async def test_command_handler_returns_handle_result():
    handler = PingHandler()
    assert (await handler(Ping(payload="hi"))).value == "HI"
    assert (await handler(Ping(payload="fail"))).error.field == "Payload"


async def test_command_handler_translates_exceptions():
    result = await PingHandler()(Ping(payload="raise"))
    assert result.error.kind is ErrorKind.UNEXPECTED
    assert "store unavailable" in result.error.message


async def test_command_handler_lets_cancellation_through():
    with pytest.raises(asyncio.CancelledError):
        await PingHandler()(Ping(payload="cancel"))


async def test_query_handler():
    handler = LookupHandler()
    assert (await handler(Lookup(key="abc"))).value == 3
    assert (await handler(Lookup(key="raise"))).has_error_kind(ErrorKind.UNEXPECTED)


class ContextCapturingHandler(CommandHandler[Ping, dict]):
    async def handle(self, command):
        return Result.success(structlog.contextvars.get_contextvars())


async def test_command_handler_binds_command_context_for_the_call():
    structlog.contextvars.clear_contextvars()
    bound = (await ContextCapturingHandler()(Ping(payload="x", issued_by="ops"))).value

    assert bound["command"] == "Ping"
    assert bound["issued_by"] == "ops"
    assert "command_id" not in bound
    assert structlog.contextvars.get_contextvars() == {}
