"""
Error Descriptors for Domain Operations
Immutable, classified failure values carried by Result
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Classification of a failure. Drives the transport mapping."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    UNEXPECTED = "unexpected"

    @property
    def code(self) -> str:
        return ERROR_CODES[self]["code"]

    @property
    def http_status(self) -> int:
        return ERROR_CODES[self]["http"]


# Keep codes stable, clients rely on them.
ERROR_CODES: dict[ErrorKind, dict[str, Any]] = {
    ErrorKind.VALIDATION: {
        "code": "validation_error",
        "http": 400,
        "message": "Validation failed for one or more fields.",
    },
    ErrorKind.NOT_FOUND: {
        "code": "not_found",
        "http": 404,
        "message": "Resource not found.",
    },
    ErrorKind.CONFLICT: {
        "code": "conflict",
        "http": 409,
        "message": "Resource conflict.",
    },
    ErrorKind.UNAUTHORIZED: {
        "code": "unauthorized",
        "http": 401,
        "message": "Unauthorized. Please provide valid credentials.",
    },
    ErrorKind.FORBIDDEN: {
        "code": "forbidden",
        "http": 403,
        "message": "You are not allowed to perform this action.",
    },
    ErrorKind.UNEXPECTED: {
        "code": "internal_error",
        "http": 500,
        "message": "An unexpected error occurred.",
    },
}


@dataclass(frozen=True, slots=True)
class Error:
    """
    A single failure descriptor.

    Errors are values: two errors with the same kind, message and field
    compare equal, and they are never mutated after construction.

    Attributes:
        kind: Failure classification
        message: Human readable description (never None)
        field: Optional form-field attribution
    """

    kind: ErrorKind
    message: str
    field: str | None = None

    def __post_init__(self) -> None:
        if self.message is None:
            raise TypeError("Error message must not be None")
        if not isinstance(self.kind, ErrorKind):
            raise TypeError(f"Error kind must be an ErrorKind, got {self.kind!r}")

    @classmethod
    def validation(cls, message: str, field: str | None = None) -> Error:
        return cls(ErrorKind.VALIDATION, message, field)

    @classmethod
    def not_found(cls, message: str = "Entity not found", field: str | None = None) -> Error:
        return cls(ErrorKind.NOT_FOUND, message, field)

    @classmethod
    def conflict(cls, message: str = "Conflict", field: str | None = None) -> Error:
        return cls(ErrorKind.CONFLICT, message, field)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", field: str | None = None) -> Error:
        return cls(ErrorKind.UNAUTHORIZED, message, field)

    @classmethod
    def forbidden(cls, message: str = "Forbidden", field: str | None = None) -> Error:
        return cls(ErrorKind.FORBIDDEN, message, field)

    @classmethod
    def unexpected(cls, message: str = "Unexpected error") -> Error:
        return cls(ErrorKind.UNEXPECTED, message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> Error:
        """Translate a caught exception into an UNEXPECTED error."""
        detail = str(exc)
        message = f"{exc.__class__.__name__}: {detail}" if detail else exc.__class__.__name__
        return cls(ErrorKind.UNEXPECTED, message)

    @property
    def code(self) -> str:
        return self.kind.code

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
        }
        if self.field:
            data["field"] = self.field
        return data

    def __str__(self) -> str:
        return f"[{self.field}] {self.message}" if self.field else self.message


def as_error(error: Error | str, field: str | None = None) -> Error:
    """Coerce a plain message into a validation error."""
    if isinstance(error, Error):
        return error
    if isinstance(error, str):
        return Error.validation(error, field)
    raise TypeError(f"Expected Error or str, got {type(error).__name__}")
