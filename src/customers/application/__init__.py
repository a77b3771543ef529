"""
Customers Application Layer
Use cases for the customers bounded context
"""
from customers.application.commands import (
    CreateCustomerCommand,
    CreateCustomerCommandHandler,
    DeleteCustomerCommand,
    DeleteCustomerCommandHandler,
    UpdateCustomerCommand,
    UpdateCustomerCommandHandler,
    UpdateCustomerStatusCommand,
    UpdateCustomerStatusCommandHandler,
)
from customers.application.models import CustomerAddressModel, CustomerModel
from customers.application.queries import (
    FindAllCustomersQuery,
    FindAllCustomersQueryHandler,
    FindOneCustomerQuery,
    FindOneCustomerQueryHandler,
)
from customers.application.rules import EmailShouldBeUniqueRule

__all__ = [
    "CustomerModel",
    "CustomerAddressModel",
    "EmailShouldBeUniqueRule",
    "CreateCustomerCommand",
    "CreateCustomerCommandHandler",
    "UpdateCustomerCommand",
    "UpdateCustomerCommandHandler",
    "UpdateCustomerStatusCommand",
    "UpdateCustomerStatusCommandHandler",
    "DeleteCustomerCommand",
    "DeleteCustomerCommandHandler",
    "FindOneCustomerQuery",
    "FindOneCustomerQueryHandler",
    "FindAllCustomersQuery",
    "FindAllCustomersQueryHandler",
]
