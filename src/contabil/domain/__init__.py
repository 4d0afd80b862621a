"""Domain layer for contabil application.

Only the pure calculation API is exported here. Services live in their own
modules (``contabil.domain.report`` and so on) because they depend on the
database layer, which itself imports the entities from this package.
"""

from contabil.domain.aggregation import PeriodAggregator, accumulate, sum_category
from contabil.domain.catalog import BalanceGroup, CanonicalCategory, Polarity, StatementType
from contabil.domain.hierarchy import select_leaves
from contabil.domain.resolver import is_valid_canonical, resolve
from contabil.domain.signs import normalize
from contabil.domain.statements import (
    compute_all_months,
    compute_balance_sheet,
    compute_income_statement,
    drill_down,
    get_unmapped_summary,
)

__all__ = [
    "BalanceGroup",
    "CanonicalCategory",
    "Polarity",
    "StatementType",
    "PeriodAggregator",
    "accumulate",
    "sum_category",
    "select_leaves",
    "resolve",
    "is_valid_canonical",
    "normalize",
    "compute_income_statement",
    "compute_all_months",
    "compute_balance_sheet",
    "drill_down",
    "get_unmapped_summary",
]
