"""Field validation for catalog entries and sales."""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from showroom.domain.errors import ValidationError

_WHOLE_NUMBER = re.compile(r"[+-]?[0-9]+")

# Characters that would break the one-line-per-record data files
FORBIDDEN_NAME_CHARS = (",", "\n", "\r")


def require_name(field: str, value: Optional[str]) -> str:
    """Return a stripped brand or model name.

    Raises:
        ValidationError: If the name is empty or contains a forbidden character
    """
    name = (value or "").strip()
    if not name:
        raise ValidationError(field, value, "must not be empty")
    for char in FORBIDDEN_NAME_CHARS:
        if char in name:
            raise ValidationError(field, value, f"must not contain {char!r}")
    return name


def to_decimal(field: str, value: Any) -> Decimal:
    """Convert a number or numeric string to a finite Decimal."""
    if isinstance(value, bool):
        raise ValidationError(field, value, "not a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(field, value, "not a number") from e
    if not amount.is_finite():
        raise ValidationError(field, value, "must be finite")
    return amount


def require_price(value: Any) -> Decimal:
    """Return a validated price, which must be greater than zero."""
    price = to_decimal("price", value)
    if price <= 0:
        raise ValidationError("price", value, "must be greater than zero")
    return price


def require_quantity(value: Any) -> int:
    """Return a validated stock quantity, which must not be negative."""
    if isinstance(value, bool):
        raise ValidationError("quantity", value, "not a whole number")
    if isinstance(value, int):
        quantity = value
    else:
        text = str(value).strip()
        if not _WHOLE_NUMBER.fullmatch(text):
            raise ValidationError("quantity", value, "not a whole number")
        quantity = int(text)
    if quantity < 0:
        raise ValidationError("quantity", value, "must not be negative")
    return quantity
