import pytest

from devkit.config import Settings, get_settings, load_settings


def test_defaults():
    s = Settings()
    assert s.environment == "local" and s.is_local
    assert s.customer_number_sequence_start == 100000
    assert s.event_handler_timeout_seconds == 5.0


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_FORMAT", "json")
    monkeypatch.setenv("CUSTOMER_NUMBER_SEQUENCE_START", "500000")
    monkeypatch.setenv("EVENT_HANDLER_TIMEOUT_SECONDS", "0.5")

    s = load_settings()
    assert s.is_staging and s.debug
    assert s.log_level == "WARNING"
    assert s.log_format == "json"
    assert s.customer_number_sequence_start == 500000
    assert s.event_handler_timeout_seconds == 0.5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"environment": "qa"},
        {"log_level": "LOUD"},
        {"log_format": "xml"},
        {"customer_number_sequence_start": 99},
        {"event_handler_timeout_seconds": 0},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_non_integer_env_is_rejected(monkeypatch):
    monkeypatch.setenv("CUSTOMER_NUMBER_SEQUENCE_START", "lots")
    with pytest.raises(ValueError, match="CUSTOMER_NUMBER_SEQUENCE_START"):
        load_settings()


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
