"""
Input Validation Bridge
Turns pydantic validation errors into VALIDATION failures
"""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from devkit.domain import Error, Result

TModel = TypeVar("TModel", bound=BaseModel)


def errors_from_validation(exc: ValidationError) -> tuple[Error, ...]:
    """One VALIDATION error per pydantic error, tagged with the dotted field path."""
    errors = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        errors.append(Error.validation(item.get("msg", "Invalid value"), location or None))
    return tuple(errors)


def validate_model(model: type[TModel], data: Mapping[str, Any] | TModel) -> Result[TModel]:
    """
    Validate raw input against a pydantic model.

    An instance of the model is validated again so models built with
    model_construct() cannot skip the checks.
    """
    payload = data.model_dump() if isinstance(data, BaseModel) else data
    try:
        return Result.success(model.model_validate(payload))
    except ValidationError as exc:
        return Result.failure(errors_from_validation(exc))
