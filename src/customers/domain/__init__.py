"""
Customers Domain Layer
"""
from customers.domain.address import Address
from customers.domain.customer import Customer
from customers.domain.customer_number import CustomerNumber
from customers.domain.customer_status import CustomerStatus
from customers.domain.email_address import EmailAddress
from customers.domain.events import (
    CustomerCreatedDomainEvent,
    CustomerDeletedDomainEvent,
    CustomerUpdatedDomainEvent,
)

__all__ = [
    "Address",
    "Customer",
    "CustomerNumber",
    "CustomerStatus",
    "EmailAddress",
    "CustomerCreatedDomainEvent",
    "CustomerUpdatedDomainEvent",
    "CustomerDeletedDomainEvent",
]
