"""
Customer Aggregate Root
Every mutator validates first and writes only when all checks passed
"""
from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from devkit.domain import BaseAggregateRoot, Error, Result, RuleSet

from customers.domain.address import Address
from customers.domain.customer_number import CustomerNumber
from customers.domain.customer_status import CustomerStatus
from customers.domain.email_address import EmailAddress
from customers.domain.events import (
    CustomerCreatedDomainEvent,
    CustomerDeletedDomainEvent,
    CustomerUpdatedDomainEvent,
)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _as_uuid(value: UUID | str | None) -> UUID | None:
    if isinstance(value, UUID) or value is None:
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class Customer(BaseAggregateRoot):
    """
    Customer aggregate root.

    Business Rules:
    - First and last name are required
    - Email must be a valid address (uniqueness is checked by the application)
    - Date of birth cannot be in the future
    - At most one address is primary
    """

    def __init__(
        self,
        first_name: str,
        last_name: str,
        email: EmailAddress,
        number: CustomerNumber,
        status: CustomerStatus = CustomerStatus.LEAD,
        date_of_birth: date | None = None,
        addresses: list[Address] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.number = number
        self.status = status
        self.date_of_birth = date_of_birth
        self.addresses: list[Address] = list(addresses or [])

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def primary_address(self) -> Address | None:
        return next((a for a in self.addresses if a.is_primary), None)

    def find_address(self, address_id: UUID | str | None) -> Address | None:
        wanted = _as_uuid(address_id)
        return next((a for a in self.addresses if a.id == wanted), None)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        number: CustomerNumber | None,
    ) -> Result[Customer]:
        """Create a customer and record CustomerCreatedDomainEvent."""
        return (
            Result.ok()
            .ensure(lambda _: not _blank(first_name), Error.validation("First name is required", "FirstName"))
            .ensure(lambda _: not _blank(last_name), Error.validation("Last name is required", "LastName"))
            .ensure(
                lambda _: isinstance(number, CustomerNumber),
                Error.validation("Customer number is required", "Number"),
            )
            .bind(lambda _: EmailAddress.create(email))
            .map(lambda address: cls(first_name.strip(), last_name.strip(), address, number))
            .tap(lambda customer: customer.raise_event(CustomerCreatedDomainEvent.of(customer)))
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def change_name(self, first_name: str | None, last_name: str | None) -> Result[Customer]:
        return (
            self.change()
            .ensure(lambda _: not _blank(first_name), Error.validation("First name is required", "FirstName"))
            .ensure(lambda _: not _blank(last_name), Error.validation("Last name is required", "LastName"))
            .when(lambda c: (c.first_name, c.last_name) != (first_name.strip(), last_name.strip()))
            .set("first_name", (first_name or "").strip())
            .set("last_name", (last_name or "").strip())
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def change_email(self, email: str | None) -> Result[Customer]:
        address = EmailAddress.create(email)
        return (
            self.change()
            .unless(lambda _: address)
            .when(lambda c: c.email != address.value)
            .set("email", address)
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def change_birth_date(self, date_of_birth: date | None) -> Result[Customer]:
        return (
            self.change()
            .ensure(
                lambda _: date_of_birth is not None,
                Error.validation("Date of birth is required", "DateOfBirth"),
            )
            .ensure(
                lambda _: RuleSet.is_not_in_future(date_of_birth).is_satisfied(),
                Error.validation("Date of birth cannot be in the future", "DateOfBirth"),
            )
            .when(lambda c: c.date_of_birth != date_of_birth)
            .set("date_of_birth", date_of_birth)
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def change_status(self, status: CustomerStatus | None) -> Result[Customer]:
        """None leaves the status untouched."""
        return (
            self.change()
            .when(lambda _: status is not None)
            .ensure(
                lambda _: isinstance(status, CustomerStatus),
                Error.validation(f"Unknown customer status {status!r}", "Status"),
            )
            .when(lambda c: c.status is not status)
            .set("status", status)
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def add_address(
        self,
        name: str | None,
        line1: str | None,
        city: str | None,
        country: str | None,
        line2: str | None = None,
        postal_code: str | None = None,
        is_primary: bool = False,
    ) -> Result[Customer]:
        created = Address.create(name, line1, city, country, line2=line2, postal_code=postal_code)
        pipeline = self.change().add("addresses", created)
        if is_primary and created.is_success():
            new_id = created.value.id
            pipeline = pipeline.execute(lambda customer: customer._make_primary(new_id))
        return pipeline.register(CustomerUpdatedDomainEvent.of).apply()

    def remove_address(self, address_id: UUID | str) -> Result[Customer]:
        return (
            self.change()
            .remove_by_id(
                "addresses",
                _as_uuid(address_id),
                Error.not_found(f"Address {address_id} not found", "Addresses"),
            )
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def change_address(
        self,
        address_id: UUID | str,
        name: str | None,
        line1: str | None,
        city: str | None,
        country: str | None,
        line2: str | None = None,
        postal_code: str | None = None,
    ) -> Result[Customer]:
        address = self.find_address(address_id)
        return (
            self.change()
            .ensure(
                lambda _: address is not None,
                Error.not_found(f"Address {address_id} not found", "Addresses"),
            )
            .unless(lambda _: Address.validate(name, line1, city, country))
            .when(lambda _: address.differs_from(name, line1, city, country, line2, postal_code))
            .execute(
                lambda _: address.update(
                    name, line1, city, country, line2=line2, postal_code=postal_code
                ).is_success()
            )
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def set_primary_address(self, address_id: UUID | str) -> Result[Customer]:
        address = self.find_address(address_id)
        return (
            self.change()
            .ensure(
                lambda _: address is not None,
                Error.not_found(f"Address {address_id} not found", "Addresses"),
            )
            .when(lambda customer: customer.primary_address is not address)
            .execute(lambda customer: customer._make_primary(address.id))
            .register(CustomerUpdatedDomainEvent.of)
            .apply()
        )

    def delete(self) -> Result[Customer]:
        """Record the deletion; removal from storage is the repository's job."""
        return self.change().register(CustomerDeletedDomainEvent.of).apply()

    def _make_primary(self, address_id: UUID) -> bool:
        for address in self.addresses:
            address.set_primary(address.id == address_id)
        return True

    def __repr__(self) -> str:
        return f"Customer(id={self.id}, number={self.number}, email={self.email})"
