"""Declared-polarity sign normalization.

Ledger exports store signs inconsistently between categories (the same file
may carry deductions as negative and costs as positive), so stored signs are
never trusted: a category total is read as a magnitude and given the sign its
category declares.
"""

from contabil.domain.catalog import CanonicalCategory, Polarity


def magnitude(value: float) -> float:
    """Return the unsigned size of a value."""
    return abs(value)


def apply_polarity(polarity: Polarity, value: float) -> float:
    """Force a value to the sign of a polarity."""
    if value == 0:
        return 0.0
    if polarity == Polarity.POSITIVE:
        return abs(value)
    return -abs(value)


def normalize(category: CanonicalCategory, value: float) -> float:
    """Read a raw category total with its declared polarity."""
    return apply_polarity(category.polarity, value)
