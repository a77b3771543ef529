"""
Find One Customer Query
"""
from __future__ import annotations

from dataclasses import dataclass

from devkit.application import BaseQuery, QueryHandler
from devkit.domain import Result

from customers.application.ids import parse_id
from customers.application.models import CustomerModel
from customers.domain.repositories import CustomerRepository


@dataclass(frozen=True)
class FindOneCustomerQuery(BaseQuery):
    customer_id: str


class FindOneCustomerQueryHandler(QueryHandler[FindOneCustomerQuery, CustomerModel]):
    """Returns the customer, or NOT_FOUND."""

    def __init__(self, repository: CustomerRepository) -> None:
        self.repository = repository

    async def handle(self, query: FindOneCustomerQuery) -> Result[CustomerModel]:
        found = await parse_id(query.customer_id).bind_async(self.repository.find_one)
        return found.map(CustomerModel.from_domain)
