"""Price and quantity parsing utilities."""

from decimal import Decimal
import re

from showroom.domain.validation import require_price, require_quantity, to_decimal

_CURRENCY = re.compile(r"^(rs\.?|inr|[$€£¥₹])", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user-entered amount into a Decimal.

    Handles various formats:
    - "20000"
    - "20,000.50"
    - "Rs 20,000"
    - "$1,999.99"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount")

    cleaned = _CURRENCY.sub("", amount_str.strip()).replace(",", "").strip()
    return to_decimal("amount", cleaned)


def parse_price(price_str: str) -> Decimal:
    """Parse a user-entered price, which must be greater than zero."""
    return require_price(parse_amount(price_str))


def parse_quantity(quantity_str: str) -> int:
    """Parse a user-entered stock quantity.

    Raises:
        ValueError: If the string is not a whole number of zero or more
    """
    if not quantity_str or not quantity_str.strip():
        raise ValueError("Empty quantity")
    return require_quantity(quantity_str.strip().replace(",", ""))


def format_price(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"
