"""
Base Value Object Contract for Domain Layer
Immutable objects defined by their attributes, not identity
"""
from __future__ import annotations

from abc import ABC
from typing import Any


class BaseValueObject(ABC):
    """
    Abstract base class for all value objects.

    Value objects are immutable and defined by their attributes.
    Two value objects are equal if all their attributes are equal.
    They have no identity (no id field).

    Subclasses assign their attributes in __init__ and then call
    _finalize_init() to freeze the object. Construction goes through a
    create(...) factory returning Result; __init__ assumes validated input.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self._equality_components() == other._equality_components()

    def __hash__(self) -> int:
        return hash((self.__class__, self._equality_components()))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k.lstrip('_')}={v!r}" for k, v in self._public_items())
        return f"{self.__class__.__name__}({attrs})"

    def __str__(self) -> str:
        items = self._public_items()
        if len(items) == 1:
            return str(items[0][1])
        return repr(self)

    def __setattr__(self, name: str, value: Any) -> None:
        """
        Prevent modification after initialization.

        Raises:
            AttributeError: If attempting to modify after __init__
        """
        if self.__dict__.get("_initialized"):
            raise AttributeError(
                f"Cannot modify immutable value object {self.__class__.__name__}"
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot modify immutable value object {self.__class__.__name__}")

    def _finalize_init(self) -> None:
        """Call this at the end of __init__ in subclasses to freeze object."""
        super().__setattr__("_initialized", True)

    def _public_items(self) -> list[tuple[str, Any]]:
        return [(k, v) for k, v in self.__dict__.items() if k != "_initialized"]

    def _equality_components(self) -> tuple:
        return tuple(sorted(self._public_items()))
