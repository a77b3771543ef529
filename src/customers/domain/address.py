"""
Customer Address Entity
Child entity of the Customer aggregate
"""
from __future__ import annotations

from typing import Any

from devkit.domain import BaseEntity, Error, Result


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _clean(value: str | None) -> str | None:
    return value.strip() if value is not None else None


class Address(BaseEntity):
    """
    Postal address owned by a customer.

    Only reachable through its Customer; the aggregate decides which
    address is primary.
    """

    def __init__(
        self,
        name: str,
        line1: str,
        city: str,
        country: str,
        line2: str | None = None,
        postal_code: str | None = None,
        is_primary: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.name = name
        self.line1 = line1
        self.line2 = line2
        self.postal_code = postal_code
        self.city = city
        self.country = country
        self.is_primary = is_primary

    @staticmethod
    def validate(name: str | None, line1: str | None, city: str | None, country: str | None) -> Result[None]:
        """Check the mandatory parts, reporting every missing one."""
        return Result.combine(
            Result.ok().ensure(lambda _: not _blank(name), Error.validation("Address name is required", "Name")),
            Result.ok().ensure(lambda _: not _blank(line1), Error.validation("Address line 1 is required", "Line1")),
            Result.ok().ensure(lambda _: not _blank(city), Error.validation("City is required", "City")),
            Result.ok().ensure(lambda _: not _blank(country), Error.validation("Country is required", "Country")),
        ).map(lambda _: None)

    @classmethod
    def create(
        cls,
        name: str | None,
        line1: str | None,
        city: str | None,
        country: str | None,
        line2: str | None = None,
        postal_code: str | None = None,
        is_primary: bool = False,
    ) -> Result[Address]:
        return cls.validate(name, line1, city, country).map(
            lambda _: cls(
                name=_clean(name),
                line1=_clean(line1),
                city=_clean(city),
                country=_clean(country),
                line2=_clean(line2),
                postal_code=_clean(postal_code),
                is_primary=is_primary,
            )
        )

    def update(
        self,
        name: str | None,
        line1: str | None,
        city: str | None,
        country: str | None,
        line2: str | None = None,
        postal_code: str | None = None,
    ) -> Result[Address]:
        """Replace all details at once; nothing changes if any part is invalid."""
        return (
            self.change()
            .unless(lambda _: Address.validate(name, line1, city, country))
            .set("name", _clean(name))
            .set("line1", _clean(line1))
            .set("line2", _clean(line2))
            .set("postal_code", _clean(postal_code))
            .set("city", _clean(city))
            .set("country", _clean(country))
            .apply()
        )

    def change_name(self, name: str | None) -> Result[Address]:
        return (
            self.change()
            .ensure(lambda _: not _blank(name), Error.validation("Address name is required", "Name"))
            .set("name", _clean(name))
            .apply()
        )

    def change_line1(self, line1: str | None) -> Result[Address]:
        return (
            self.change()
            .ensure(lambda _: not _blank(line1), Error.validation("Address line 1 is required", "Line1"))
            .set("line1", _clean(line1))
            .apply()
        )

    def change_line2(self, line2: str | None) -> Result[Address]:
        return self.change().set("line2", _clean(line2)).apply()

    def change_postal_code(self, postal_code: str | None) -> Result[Address]:
        return self.change().set("postal_code", _clean(postal_code)).apply()

    def change_city(self, city: str | None) -> Result[Address]:
        return (
            self.change()
            .ensure(lambda _: not _blank(city), Error.validation("City is required", "City"))
            .set("city", _clean(city))
            .apply()
        )

    def change_country(self, country: str | None) -> Result[Address]:
        return (
            self.change()
            .ensure(lambda _: not _blank(country), Error.validation("Country is required", "Country"))
            .set("country", _clean(country))
            .apply()
        )

    def set_primary(self, is_primary: bool = True) -> Result[Address]:
        return self.change().set("is_primary", bool(is_primary)).apply()

    def differs_from(
        self,
        name: str | None,
        line1: str | None,
        city: str | None,
        country: str | None,
        line2: str | None = None,
        postal_code: str | None = None,
    ) -> bool:
        return (self.name, self.line1, self.line2, self.postal_code, self.city, self.country) != (
            _clean(name),
            _clean(line1),
            _clean(line2),
            _clean(postal_code),
            _clean(city),
            _clean(country),
        )
