"""
Customers module wiring
Builds the handlers over one repository, unit of work and event bus
"""
from __future__ import annotations

from dataclasses import dataclass

from devkit.config import Settings, get_settings
from devkit.infrastructure.messaging import EventBus
from devkit.infrastructure.persistence import InMemoryUnitOfWork

from customers.application import (
    CreateCustomerCommandHandler,
    DeleteCustomerCommandHandler,
    FindAllCustomersQueryHandler,
    FindOneCustomerQueryHandler,
    UpdateCustomerCommandHandler,
    UpdateCustomerStatusCommandHandler,
)
from customers.application.event_handlers import register_event_handlers
from customers.infrastructure import InMemoryCustomerRepository


@dataclass
class CustomersModule:
    repository: InMemoryCustomerRepository
    event_bus: EventBus
    create: CreateCustomerCommandHandler
    update: UpdateCustomerCommandHandler
    update_status: UpdateCustomerStatusCommandHandler
    delete: DeleteCustomerCommandHandler
    find_one: FindOneCustomerQueryHandler
    find_all: FindAllCustomersQueryHandler


def build_customers_module(settings: Settings | None = None, event_bus: EventBus | None = None) -> CustomersModule:
    settings = settings or get_settings()
    event_bus = event_bus or EventBus(handler_timeout=settings.event_handler_timeout_seconds)
    register_event_handlers(event_bus)

    repository = InMemoryCustomerRepository(sequence_start=settings.customer_number_sequence_start)
    uow = InMemoryUnitOfWork(event_bus)
    return CustomersModule(
        repository=repository,
        event_bus=event_bus,
        create=CreateCustomerCommandHandler(repository, uow),
        update=UpdateCustomerCommandHandler(repository, uow),
        update_status=UpdateCustomerStatusCommandHandler(repository, uow),
        delete=DeleteCustomerCommandHandler(repository, uow),
        find_one=FindOneCustomerQueryHandler(repository),
        find_all=FindAllCustomersQueryHandler(repository),
    )
