from customers.application.commands.create_customer_command import (
    CreateCustomerCommand,
    CreateCustomerCommandHandler,
)
from customers.application.commands.delete_customer_command import (
    DeleteCustomerCommand,
    DeleteCustomerCommandHandler,
)
from customers.application.commands.update_customer_command import (
    UpdateCustomerCommand,
    UpdateCustomerCommandHandler,
    update_addresses,
)
from customers.application.commands.update_customer_status_command import (
    UpdateCustomerStatusCommand,
    UpdateCustomerStatusCommandHandler,
)

__all__ = [
    "CreateCustomerCommand",
    "CreateCustomerCommandHandler",
    "UpdateCustomerCommand",
    "UpdateCustomerCommandHandler",
    "UpdateCustomerStatusCommand",
    "UpdateCustomerStatusCommandHandler",
    "DeleteCustomerCommand",
    "DeleteCustomerCommandHandler",
    "update_addresses",
]
