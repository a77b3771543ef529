"""
Programmer-error exceptions for the domain core.

Expected failures travel as Result values. These exceptions mark contract
violations that must fail loudly instead.
"""
from __future__ import annotations


class DomainContractError(Exception):
    """Base class for misuse of the domain core."""


class ResultValueError(DomainContractError):
    """Raised when the value of a failed Result is accessed."""

    def __init__(self, errors: tuple = ()) -> None:
        messages = "; ".join(str(e) for e in errors) or "no errors recorded"
        super().__init__(f"Attempted to access the value of a failed result: {messages}")
        self.errors = errors


class ChangeAlreadyAppliedError(DomainContractError):
    """Raised when a Change pipeline is used after apply()."""

    def __init__(self, target: object) -> None:
        super().__init__(
            f"Change for {target.__class__.__name__} was already applied and cannot be reused"
        )
