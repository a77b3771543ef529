import logging

import structlog

from devkit.config import Settings
from devkit.logging import (
    PIIRedactionProcessor,
    bind_context,
    build_processors,
    clear_context,
    get_correlation_id,
    set_correlation_id,
    setup_logging,
)


def test_pii_redaction():
    redacted = PIIRedactionProcessor()(None, "info", {"event": "mail john@x.com", "nested": ["+491701234567"]})
    assert redacted["event"] == "mail ***@x.com"
    assert redacted["nested"] == ["+4****4567"]


def test_redaction_only_outside_local():
    local = build_processors(Settings(environment="local"))
    prod = build_processors(Settings(environment="prod"))
    assert not any(isinstance(p, PIIRedactionProcessor) for p in local)
    assert any(isinstance(p, PIIRedactionProcessor) for p in prod)
    assert isinstance(prod[-1], structlog.processors.JSONRenderer)


def test_correlation_id_round_trip():
    cid = set_correlation_id("abc-123")
    assert cid == get_correlation_id() == "abc-123"
    clear_context()
    assert get_correlation_id() is None


def test_setup_logging_configures_structlog(capsys):
    setup_logging(Settings(environment="prod", log_format="json"))
    try:
        structlog.get_logger("devkit.test").info("hello", customer_id="42")
        out = capsys.readouterr().out
        assert "customer_id" in out
        assert "hello" in out
        assert "devkit.test" in out
    finally:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()


def test_bind_context_restores_previous_values():
    clear_context()
    set_correlation_id("outer")
    with bind_context(command="CreateCustomerCommand", customer_id=None, correlation_id="inner"):
        bound = structlog.contextvars.get_contextvars()
        assert bound["command"] == "CreateCustomerCommand"
        assert "customer_id" not in bound
        assert get_correlation_id() == "inner"
    assert get_correlation_id() == "outer"
    assert "command" not in structlog.contextvars.get_contextvars()
    clear_context()
