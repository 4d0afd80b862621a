"""Amount parsing utilities."""

import math
import re
from typing import Any, Iterable

MONTHS_PER_YEAR = 12

# "1.500" in a Brazilian export is fifteen hundred, not one and a half
_THOUSANDS_ONLY = re.compile(r"-?\d{1,3}\.\d{3}")


def parse_amount(amount_str: str) -> float:
    """Parse a ledger amount string into a float.

    Handles the formats found in Brazilian ledger exports:
    - "1234.56" / "1234,56"
    - "1.234,56" and "1.234" (thousands dot, decimal comma)
    - "R$ 1.234,56"
    - "-1.234,56"
    - "(1.234,56)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Float amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and inner whitespace
    amount_str = re.sub(r"R\$|[$€£]|\s", "", amount_str)

    if "," in amount_str:
        # Decimal comma: dots are thousands separators
        amount_str = amount_str.replace(".", "").replace(",", ".")
    elif amount_str.count(".") > 1 or _THOUSANDS_ONLY.fullmatch(amount_str):
        amount_str = amount_str.replace(".", "")

    try:
        amount = float(amount_str)
    except ValueError as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not math.isfinite(amount):
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def coerce_amount(value: Any) -> float:
    """Convert a cell to a float, treating anything malformed as zero.

    Blank cells, "-" placeholders and spreadsheet errors ("#N/A", "#REF!")
    become 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text or text == "-" or text.startswith("#"):
        return 0.0
    try:
        return parse_amount(text)
    except ValueError:
        return 0.0


def coerce_monthly_values(values: Iterable[Any] | None) -> tuple[float, ...]:
    """Return exactly twelve monthly amounts (Jan..Dec).

    Missing entries are padded with zero and extra entries are dropped.
    """
    result = [coerce_amount(v) for v in list(values or [])[:MONTHS_PER_YEAR]]
    result.extend([0.0] * (MONTHS_PER_YEAR - len(result)))
    return tuple(result)
