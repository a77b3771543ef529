"""
Delete Customer Command
"""
from __future__ import annotations

from dataclasses import dataclass

from devkit.application import BaseCommand, CommandHandler
from devkit.domain import Error, Result
from devkit.infrastructure.persistence import IUnitOfWork
from devkit.logging import get_logger

from customers.application.ids import parse_id
from customers.domain import Customer
from customers.domain.repositories import CustomerRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeleteCustomerCommand(BaseCommand):
    customer_id: str


class DeleteCustomerCommandHandler(CommandHandler[DeleteCustomerCommand, None]):
    """
    Deletes the customer and publishes CustomerDeletedDomainEvent.

    Produces NOT_FOUND when the customer does not exist.
    """

    def __init__(self, repository: CustomerRepository, uow: IUnitOfWork) -> None:
        self.repository = repository
        self.uow = uow

    async def handle(self, command: DeleteCustomerCommand) -> Result[None]:
        result = await parse_id(command.customer_id).bind_async(self.repository.find_one)
        result = result.bind(lambda customer: customer.delete())
        result = await result.bind_async(self._delete)
        result = await result.tap_async(self._commit)

        return result.tap(
            lambda customer: logger.info("AUDIT - Customer deleted", customer_id=str(customer.id))
        ).map(lambda _: None)

    async def _delete(self, customer: Customer) -> Result[Customer]:
        deleted = await self.repository.delete(customer.id)
        return deleted.ensure(
            lambda removed: removed, Error.not_found(f"Customer {customer.id} not found")
        ).map(lambda _: customer)

    async def _commit(self, customer: Customer) -> None:
        async with self.uow:
            self.uow.track(customer)
            await self.uow.commit()
