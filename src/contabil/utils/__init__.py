"""Utility functions for contabil."""

from contabil.utils.amount_parser import coerce_amount, coerce_monthly_values, parse_amount
from contabil.utils.formatting import format_brl, format_number, format_percent

__all__ = [
    "parse_amount",
    "coerce_amount",
    "coerce_monthly_values",
    "format_brl",
    "format_number",
    "format_percent",
]
