"""
Customer Domain Events
Events carry snapshot values, never references to the aggregate
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from devkit.domain import DomainEvent

if TYPE_CHECKING:
    from customers.domain.customer import Customer


@dataclass(frozen=True, kw_only=True)
class CustomerCreatedDomainEvent(DomainEvent):
    """Raised when a new customer is created."""

    customer_id: UUID
    number: str
    email: str
    first_name: str
    last_name: str

    @classmethod
    def of(cls, customer: Customer) -> CustomerCreatedDomainEvent:
        return cls(
            customer_id=customer.id,
            number=str(customer.number),
            email=str(customer.email),
            first_name=customer.first_name,
            last_name=customer.last_name,
        )


@dataclass(frozen=True, kw_only=True)
class CustomerUpdatedDomainEvent(DomainEvent):
    """Raised when customer details, status or addresses changed."""

    customer_id: UUID
    first_name: str
    last_name: str
    email: str
    status: str
    date_of_birth: date | None = None
    address_count: int = 0

    @classmethod
    def of(cls, customer: Customer) -> CustomerUpdatedDomainEvent:
        return cls(
            customer_id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=str(customer.email),
            status=customer.status.name,
            date_of_birth=customer.date_of_birth,
            address_count=len(customer.addresses),
        )


@dataclass(frozen=True, kw_only=True)
class CustomerDeletedDomainEvent(DomainEvent):
    """Raised when a customer is deleted."""

    customer_id: UUID
    number: str

    @classmethod
    def of(cls, customer: Customer) -> CustomerDeletedDomainEvent:
        return cls(customer_id=customer.id, number=str(customer.number))
