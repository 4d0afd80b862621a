"""Brazilian number, currency and percentage formatting."""

from decimal import ROUND_HALF_UP, Decimal


def _round_half_up(value: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_number(value: float, places: int = 2) -> str:
    """Format a number with "." thousands and "," decimal separators.

    Examples:
        >>> format_number(1234.5)
        '1.234,50'
        >>> format_number(-0.004)
        '0,00'
    """
    rounded = _round_half_up(value, places)
    if rounded == 0:
        rounded = abs(rounded)
    text = f"{rounded:,.{places}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_brl(value: float) -> str:
    """Format an amount as Brazilian reais ("R$ 1.234,56", "-R$ 10,00")."""
    text = format_number(value)
    if text.startswith("-"):
        return f"-R$ {text[1:]}"
    return f"R$ {text}"


def format_percent(value: float, base: float) -> str:
    """Format value as a whole percentage of base.

    Rounds half up and returns "0%" when base is zero.
    """
    if base == 0:
        return "0%"
    return f"{format_number(value / base * 100, 0)}%"


def format_ratio(value: float, places: int = 2) -> str:
    """Format a plain ratio such as current liquidity."""
    return format_number(value, places)
