"""
Find All Customers Query
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from devkit.application import BaseQuery, QueryHandler
from devkit.domain import Result, Rule, RuleSet

from customers.application.models import CustomerModel
from customers.domain import Customer, CustomerStatus
from customers.domain.repositories import CustomerRepository


@dataclass(frozen=True)
class FindAllCustomersQuery(BaseQuery):
    """
    Optional filters are combined with AND.

    Attributes:
        status: Status name to match
        email: Fragment the email must contain (case-insensitive)
        last_name: Exact last name (case-insensitive)
        skip: Number of customers to skip (pagination)
        limit: Maximum number of customers to return
    """
    status: Optional[str] = None
    email: Optional[str] = None
    last_name: Optional[str] = None
    skip: int = 0
    limit: Optional[int] = 100


class FindAllCustomersQueryHandler(QueryHandler[FindAllCustomersQuery, list[CustomerModel]]):
    """Loads the matching customers ordered by creation time."""

    def __init__(self, repository: CustomerRepository) -> None:
        self.repository = repository

    async def handle(self, query: FindAllCustomersQuery) -> Result[list[CustomerModel]]:
        checked = Rule.add(RuleSet.greater_than_or_equal(query.skip, 0, field="Skip"))
        if query.limit is not None:
            checked = checked.add(RuleSet.is_in_range(query.limit, 1, 1000, field="Limit"))
        result = checked.check_all()

        if query.status:
            result = result.bind(lambda _: CustomerStatus.from_name(query.status))
        else:
            result = result.map(lambda _: None)

        found = await result.bind_async(
            lambda status: self.repository.find_all(
                self._specification(query, status), skip=query.skip, limit=query.limit
            )
        )
        return found.map(lambda customers: [CustomerModel.from_domain(c) for c in customers])

    @staticmethod
    def _specification(query: FindAllCustomersQuery, status: CustomerStatus | None):
        email = (query.email or "").strip().lower()
        last_name = (query.last_name or "").strip().lower()

        def matches(customer: Customer) -> bool:
            if status is not None and customer.status is not status:
                return False
            if email and email not in customer.email.value:
                return False
            if last_name and customer.last_name.lower() != last_name:
                return False
            return True

        return matches
