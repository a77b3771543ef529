"""
Customer application rules
Rules that need a collaborator and so cannot live in the aggregate
"""
from __future__ import annotations

from uuid import UUID

from devkit.domain import AsyncRule, ErrorKind

from customers.domain.repositories import CustomerRepository

RESERVED_LAST_NAME = "notallowed"


class EmailShouldBeUniqueRule(AsyncRule):
    """No other customer may use the email address."""

    message = "Customer Email should not be used already"
    field = "Email"
    kind = ErrorKind.CONFLICT

    def __init__(self, email: str | None, repository: CustomerRepository, exclude_id: UUID | None = None) -> None:
        self.email = (email or "").strip().lower()
        self.repository = repository
        self.exclude_id = exclude_id

    async def is_satisfied_async(self) -> bool:
        return await self.repository.count_by_email(self.email, exclude_id=self.exclude_id) == 0
