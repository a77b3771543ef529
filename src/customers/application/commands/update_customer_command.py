"""
Update Customer Command
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from devkit.application import BaseCommand, CommandHandler, validate_model
from devkit.domain import Error, Result, Rule, RuleSet
from devkit.infrastructure.persistence import IUnitOfWork
from devkit.logging import get_logger

from customers.application.ids import parse_id
from customers.application.models import CustomerAddressModel, CustomerModel
from customers.application.rules import RESERVED_LAST_NAME, EmailShouldBeUniqueRule
from customers.domain import Customer, CustomerStatus
from customers.domain.repositories import CustomerRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpdateCustomerCommand(BaseCommand):
    """
    Command to update an existing customer.

    The address list is authoritative: addresses missing from it are
    removed, addresses without an id are added, the rest are changed.

    Attributes:
        model: Full customer state as known by the client
    """
    model: CustomerModel

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], **metadata: Any) -> Result[UpdateCustomerCommand]:
        return validate_model(CustomerModel, payload).map(lambda model: cls(model=model, **metadata))

    def validate(self) -> Result[None]:
        model = self.model
        return Result.combine(
            parse_id(model.id),
            Rule.add(RuleSet.is_not_empty(model.first_name, field="FirstName"))
            .add(RuleSet.is_not_empty(model.last_name, field="LastName"))
            .add(RuleSet.is_not_empty(model.email, field="Email"))
            .check_all(),
            *(parse_id(address.id, field="Addresses") for address in model.addresses if address.id),
        ).map(lambda _: None)


def update_addresses(customer: Customer, models: Sequence[CustomerAddressModel]) -> Result[Customer]:
    """Reconcile the customer's addresses with the submitted list."""
    wanted = {parse_id(m.id).value for m in models if m.id}
    result: Result[Customer] = Result.success(customer)

    for address in list(customer.addresses):
        if address.id not in wanted:
            result = result.bind(lambda c, address_id=address.id: c.remove_address(address_id))

    for m in models:
        if not m.id:
            result = result.bind(
                lambda c, m=m: c.add_address(
                    m.name, m.line1, m.city, m.country,
                    line2=m.line2, postal_code=m.postal_code, is_primary=m.is_primary,
                )
            )
        elif customer.find_address(m.id) is not None:
            result = result.bind(
                lambda c, m=m: c.change_address(
                    m.id, m.name, m.line1, m.city, m.country,
                    line2=m.line2, postal_code=m.postal_code,
                )
            )

    primary = next((m for m in models if m.is_primary and m.id), None)
    if primary is not None and customer.find_address(primary.id) is not None:
        result = result.bind(lambda c: c.set_primary_address(primary.id))
    return result


class UpdateCustomerCommandHandler(CommandHandler[UpdateCustomerCommand, CustomerModel]):
    """Handler for UpdateCustomerCommand."""

    def __init__(self, repository: CustomerRepository, uow: IUnitOfWork) -> None:
        self.repository = repository
        self.uow = uow

    async def handle(self, command: UpdateCustomerCommand) -> Result[CustomerModel]:
        model = command.model

        result = await command.validate().bind_async(lambda _: self.repository.find_one(parse_id(model.id).value))
        result = await result.unless_async(
            lambda customer: Rule.add(
                RuleSet.not_equal((model.last_name or "").lower(), RESERVED_LAST_NAME, field="LastName")
            )
            .add(EmailShouldBeUniqueRule(model.email, self.repository, exclude_id=customer.id))
            .check_async()
        )
        result = (
            result.ensure(
                lambda customer: not model.concurrency_version
                or model.concurrency_version == str(customer.concurrency_version),
                Error.conflict("Customer was modified by someone else", "ConcurrencyVersion"),
            )
            .bind(lambda customer: customer.change_name(model.first_name, model.last_name))
            .bind(lambda customer: customer.change_email(model.email))
            .bind(
                lambda customer: customer.change_birth_date(model.date_of_birth)
                if model.date_of_birth is not None
                else Result.success(customer)
            )
            .bind(
                lambda customer: CustomerStatus.from_name(model.status).bind(customer.change_status)
                if model.status
                else Result.success(customer)
            )
            .bind(lambda customer: update_addresses(customer, model.addresses))
        )
        result = await result.bind_async(self.repository.update)
        result = await result.tap_async(self._commit)

        return result.tap(
            lambda customer: logger.info(
                "AUDIT - Customer updated",
                customer_id=str(customer.id),
                email=str(customer.email),
            )
        ).map(CustomerModel.from_domain)

    async def _commit(self, customer: Customer) -> None:
        async with self.uow:
            self.uow.track(customer)
            await self.uow.commit()
