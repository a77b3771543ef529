"""
Customer Schemas
Pydantic input/output models for the customers use cases
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from customers.domain import Address, Customer


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class CustomerAddressModel(_Schema):
    """Address as exchanged with clients. An empty id means a new address."""

    id: Optional[str] = None
    name: str = Field(min_length=1)
    line1: str = Field(min_length=1)
    line2: Optional[str] = None
    postal_code: Optional[str] = None
    city: str = Field(min_length=1)
    country: str = Field(min_length=1)
    is_primary: bool = False

    @classmethod
    def from_domain(cls, address: Address) -> CustomerAddressModel:
        return cls(
            id=str(address.id),
            name=address.name,
            line1=address.line1,
            line2=address.line2,
            postal_code=address.postal_code,
            city=address.city,
            country=address.country,
            is_primary=address.is_primary,
        )


class CustomerModel(_Schema):
    """Customer as exchanged with clients."""

    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    number: Optional[str] = None
    date_of_birth: Optional[date] = None
    email: Optional[str] = None
    status: Optional[str] = None
    concurrency_version: Optional[str] = None
    addresses: list[CustomerAddressModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, customer: Customer) -> CustomerModel:
        return cls(
            id=str(customer.id),
            first_name=customer.first_name,
            last_name=customer.last_name,
            number=str(customer.number),
            date_of_birth=customer.date_of_birth,
            email=str(customer.email),
            status=customer.status.display_name,
            concurrency_version=str(customer.concurrency_version),
            addresses=[CustomerAddressModel.from_domain(a) for a in customer.addresses],
        )

    def to_json(self) -> dict:
        """camelCase, JSON-safe dump for HTTP responses."""
        return self.model_dump(mode="json", by_alias=True)
