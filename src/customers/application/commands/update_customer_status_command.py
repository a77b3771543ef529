"""
Update Customer Status Command
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from devkit.application import BaseCommand, CommandHandler
from devkit.domain import Result
from devkit.infrastructure.persistence import IUnitOfWork
from devkit.logging import get_logger

from customers.application.ids import parse_id
from customers.application.models import CustomerModel
from customers.domain import Customer, CustomerStatus
from customers.domain.repositories import CustomerRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpdateCustomerStatusCommand(BaseCommand):
    """
    Attributes:
        customer_id: Customer identifier
        status: Status name (Lead, Active, Retired)
    """
    customer_id: str
    status: str


class UpdateCustomerStatusCommandHandler(CommandHandler[UpdateCustomerStatusCommand, CustomerModel]):
    """Loads the customer, changes the status (idempotent if same) and persists."""

    def __init__(self, repository: CustomerRepository, uow: IUnitOfWork) -> None:
        self.repository = repository
        self.uow = uow

    async def handle(self, command: UpdateCustomerStatusCommand) -> Result[CustomerModel]:
        result = Result.combine(parse_id(command.customer_id), CustomerStatus.from_name(command.status))
        result = await result.bind_async(lambda values: self._load(*values))
        result = await result.bind_async(self.repository.update)
        result = await result.tap_async(self._commit)

        return result.tap(
            lambda customer: logger.info(
                "AUDIT - Customer status updated",
                customer_id=str(customer.id),
                status=customer.status.name,
            )
        ).map(CustomerModel.from_domain)

    async def _load(self, customer_id: UUID, status: CustomerStatus) -> Result[Customer]:
        found = await self.repository.find_one(customer_id)
        return found.bind(lambda customer: customer.change_status(status))

    async def _commit(self, customer: Customer) -> None:
        async with self.uow:
            self.uow.track(customer)
            await self.uow.commit()
