"""
Create Customer Command
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from devkit.application import BaseCommand, CommandHandler, validate_model
from devkit.domain import Error, Result, Rule, RuleSet, clock
from devkit.infrastructure.persistence import IUnitOfWork
from devkit.logging import get_logger

from customers.application.models import CustomerModel
from customers.application.rules import RESERVED_LAST_NAME, EmailShouldBeUniqueRule
from customers.domain import Customer, CustomerNumber
from customers.domain.repositories import CustomerRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class CreateCustomerCommand(BaseCommand):
    """
    Command to create a new customer.

    Attributes:
        model: Customer data; id, number and status are assigned by the system
    """
    model: CustomerModel

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], **metadata: Any) -> Result[CreateCustomerCommand]:
        return validate_model(CustomerModel, payload).map(lambda model: cls(model=model, **metadata))

    def validate(self) -> Result[None]:
        model = self.model
        return (
            Rule.add(lambda: not model.id, Error.validation("Must be empty.", "Id"))
            .add(RuleSet.is_not_empty(model.first_name, field="FirstName"))
            .add(RuleSet.is_not_empty(model.last_name, field="LastName"))
            .add(RuleSet.is_not_empty(model.email, field="Email"))
            .check_all()
        )


class CreateCustomerCommandHandler(CommandHandler[CreateCustomerCommand, CustomerModel]):
    """
    Handler for CreateCustomerCommand.

    Numbers the customer from the repository sequence, checks the business
    rules that need storage, inserts and publishes CustomerCreatedDomainEvent.
    """

    def __init__(self, repository: CustomerRepository, uow: IUnitOfWork) -> None:
        self.repository = repository
        self.uow = uow

    async def handle(self, command: CreateCustomerCommand) -> Result[CustomerModel]:
        model = command.model

        result = await command.validate().bind_async(lambda _: self._next_number())
        result = result.bind(
            lambda number: Customer.create(model.first_name, model.last_name, model.email, number)
        )
        result = await result.unless_async(
            lambda customer: Rule.add(
                RuleSet.not_equal(customer.last_name.lower(), RESERVED_LAST_NAME, field="LastName")
            )
            .add(EmailShouldBeUniqueRule(customer.email.value, self.repository))
            .check_async()
        )
        if model.date_of_birth is not None:
            result = result.bind(lambda customer: customer.change_birth_date(model.date_of_birth))
        result = await result.bind_async(self.repository.insert)
        result = await result.tap_async(self._commit)

        return result.tap(
            lambda customer: logger.info(
                "AUDIT - Customer created",
                customer_id=str(customer.id),
                number=str(customer.number),
                email=str(customer.email),
            )
        ).map(CustomerModel.from_domain)

    async def _next_number(self) -> Result[CustomerNumber]:
        sequence = await self.repository.next_sequence()
        return CustomerNumber.from_date(clock.today(), sequence)

    async def _commit(self, customer: Customer) -> None:
        async with self.uow:
            self.uow.track(customer)
            await self.uow.commit()
