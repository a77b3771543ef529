"""
Customer Repository Port
Implemented by infrastructure, consumed by application handlers
"""
from __future__ import annotations

from typing import Callable, Protocol, Sequence
from uuid import UUID

from devkit.domain import Result

from customers.domain.customer import Customer


class CustomerRepository(Protocol):
    """Persistence port for the Customer aggregate. Expected failures are Results."""

    async def insert(self, customer: Customer) -> Result[Customer]:
        ...

    async def find_one(self, customer_id: UUID) -> Result[Customer]:
        ...

    async def find_all(
        self,
        specification: Callable[[Customer], bool] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Result[Sequence[Customer]]:
        ...

    async def update(self, customer: Customer) -> Result[Customer]:
        ...

    async def delete(self, customer_id: UUID) -> Result[bool]:
        ...

    async def count(self, specification: Callable[[Customer], bool] | None = None) -> int:
        ...

    async def count_by_email(self, email: str, exclude_id: UUID | None = None) -> int:
        """Number of customers using email (normalized), optionally ignoring one customer."""
        ...

    async def next_sequence(self) -> int:
        """Next free customer number sequence value."""
        ...
