"""Utility functions for showroom."""

from showroom.utils.date_parser import parse_date, get_date_range
from showroom.utils.amount_parser import parse_amount, parse_price, parse_quantity, format_price

__all__ = ["parse_date", "get_date_range", "parse_amount", "parse_price", "parse_quantity", "format_price"]
