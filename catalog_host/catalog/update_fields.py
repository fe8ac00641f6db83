"""Closed set of catalog item fields that can be updated one at a time.

Callers name a property and pass its new value as a string. The name is
resolved against ``UpdateField`` and the value is coerced by that field's
parser, so only known columns can ever be written.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from catalog_host.catalog.models import (
    INTEGER_MAX,
    NAME_MAX_LENGTH,
    PICTURE_FILE_NAME_MAX_LENGTH,
    PRICE_PRECISION,
    PRICE_SCALE,
)
from catalog_host.domain.result import FailureReason, Found, NotFound, Result

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_CENT = Decimal(1).scaleb(-PRICE_SCALE)


class UpdateField(str, Enum):
    """Mutable CatalogItem columns."""

    NAME = "name"
    DESCRIPTION = "description"
    PRICE = "price"
    AVAILABLE_STOCK = "available_stock"
    CATALOG_BRAND_ID = "catalog_brand_id"
    CATALOG_TYPE_ID = "catalog_type_id"
    PICTURE_FILE_NAME = "picture_file_name"

    @classmethod
    def resolve(cls, property_name: str) -> "UpdateField | None":
        """Find the field for a property name.

        Accepts PascalCase ("AvailableStock"), camelCase ("availableStock")
        and snake_case ("available_stock") spellings.

        Args:
            property_name: Name supplied by the caller.

        Returns:
            Matching field, or None if the name is unknown or immutable.
        """
        key = _CAMEL_BOUNDARY.sub("_", property_name.strip()).lower()
        try:
            return cls(key)
        except ValueError:
            return None

    @property
    def is_reference(self) -> bool:
        """Whether the field points at another table."""
        return self in (UpdateField.CATALOG_BRAND_ID, UpdateField.CATALOG_TYPE_ID)


def _parse_text(value: str) -> str:
    return value


def _parse_decimal(value: str) -> Decimal:
    try:
        parsed = Decimal(value.strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {value!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"not a finite decimal: {value!r}")
    return parsed


def _parse_int(value: str) -> int:
    return int(value.strip())


_PARSERS: dict[UpdateField, Callable[[str], Any]] = {
    UpdateField.NAME: _parse_text,
    UpdateField.DESCRIPTION: _parse_text,
    UpdateField.PRICE: _parse_decimal,
    UpdateField.AVAILABLE_STOCK: _parse_int,
    UpdateField.CATALOG_BRAND_ID: _parse_int,
    UpdateField.CATALOG_TYPE_ID: _parse_int,
    UpdateField.PICTURE_FILE_NAME: _parse_text,
}


def check_invariant(field: UpdateField, value: Any) -> str | None:
    """Check a typed value against the column's invariant and limits.

    Values the column cannot hold exactly (over-long text, prices with
    sub-cent digits, integers beyond 32 bits) are rejected here instead of
    being rounded or refused by the store.

    Args:
        field: Target field.
        value: Already coerced value.

    Returns:
        Violation message, or None if the value is acceptable.
    """
    if field is UpdateField.NAME:
        if not value.strip():
            return "name must not be empty"
        if len(value) > NAME_MAX_LENGTH:
            return f"name must be at most {NAME_MAX_LENGTH} characters"
    elif field is UpdateField.PICTURE_FILE_NAME:
        if len(value) > PICTURE_FILE_NAME_MAX_LENGTH:
            return f"picture_file_name must be at most {PICTURE_FILE_NAME_MAX_LENGTH} characters"
    elif field is UpdateField.PRICE:
        return _price_violation(value)
    elif field is UpdateField.AVAILABLE_STOCK:
        if value < 0:
            return "available_stock must be non-negative"
        if value > INTEGER_MAX:
            return f"available_stock must be at most {INTEGER_MAX}"
    elif field.is_reference:
        if not -INTEGER_MAX - 1 <= value <= INTEGER_MAX:
            return f"{field.value} is out of range"
    return None


def _price_violation(value: Any) -> str | None:
    if not isinstance(value, Decimal) or not value.is_finite():
        return "price must be a finite decimal"
    if value < 0:
        return "price must be non-negative"
    if value and value.adjusted() >= PRICE_PRECISION - PRICE_SCALE:
        return f"price must be below 10^{PRICE_PRECISION - PRICE_SCALE}"
    if value != value.quantize(_CENT):
        return f"price must have at most {PRICE_SCALE} decimal places"
    return None


@dataclass(frozen=True)
class FieldUpdate:
    """A typed single-field change."""

    field: UpdateField
    value: Any

    def apply(self, item: Any) -> None:
        """Write the value onto an item."""
        setattr(item, self.field.value, self.value)


def parse_update(property_name: str, value: str) -> Result[FieldUpdate]:
    """Turn a (property, value) string pair into a typed update.

    Args:
        property_name: Field name as supplied by the caller.
        value: New value as a string.

    Returns:
        Found with the update, or NotFound with INVALID_PROPERTY when the
        name is not an updatable field, INVALID_VALUE when the value cannot
        be coerced or breaks the field's invariant.
    """
    field = UpdateField.resolve(property_name)
    if field is None:
        return NotFound(
            FailureReason.INVALID_PROPERTY,
            f"'{property_name}' is not an updatable catalog item field",
        )

    try:
        typed = _PARSERS[field](value)
    except ValueError as exc:
        return NotFound(FailureReason.INVALID_VALUE, f"{field.value}: {exc}")

    violation = check_invariant(field, typed)
    if violation:
        return NotFound(FailureReason.INVALID_VALUE, violation)

    return Found(FieldUpdate(field=field, value=typed))
