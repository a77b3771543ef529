from datetime import datetime, timezone

import pytest

from devkit.config import Settings
from devkit.domain import clock
from devkit.infrastructure.messaging import EventBus
from devkit.infrastructure.persistence import InMemoryUnitOfWork

from customers.bootstrap import build_customers_module
from customers.domain import Customer, CustomerNumber
from customers.infrastructure import InMemoryCustomerRepository

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_now():
    with clock.frozen_clock(NOW) as moment:
        yield moment


@pytest.fixture
def settings():
    return Settings(environment="local", log_level="DEBUG")


@pytest.fixture
def event_bus():
    return EventBus(handler_timeout=1.0)


@pytest.fixture
def uow(event_bus):
    return InMemoryUnitOfWork(event_bus)


@pytest.fixture
def repository():
    return InMemoryCustomerRepository()


@pytest.fixture
def customers(settings, event_bus):
    return build_customers_module(settings=settings, event_bus=event_bus)


@pytest.fixture
def number():
    return CustomerNumber.generate(2024, 100000).value


@pytest.fixture
def customer(number):
    c = Customer.create("John", "Doe", "john@x.com", number).value
    c.collect_domain_events()
    return c
