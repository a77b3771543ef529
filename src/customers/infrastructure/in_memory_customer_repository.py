"""
In-Memory Customer Repository
"""
from __future__ import annotations

from uuid import UUID

from devkit.infrastructure.persistence import InMemoryRepository

from customers.domain import Customer


class InMemoryCustomerRepository(InMemoryRepository[Customer]):
    """CustomerRepository over the generic in-memory store."""

    def __init__(self, sequence_start: int = 100000) -> None:
        super().__init__()
        self._next = sequence_start

    @property
    def entity_name(self) -> str:
        return "Customer"

    async def count_by_email(self, email: str, exclude_id: UUID | None = None) -> int:
        wanted = (email or "").strip().lower()
        return await self.count(lambda c: c.email.value == wanted and c.id != exclude_id)

    async def next_sequence(self) -> int:
        async with self._lock:
            value = self._next
            self._next += 1
        return value
