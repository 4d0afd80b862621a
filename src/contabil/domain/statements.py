"""Public calculation API over in-memory rows.

Callers pass rows already loaded for one client, year and statement type;
nothing here touches storage.
"""

from typing import Any, Iterable, Optional

from contabil.domain.aggregation import PeriodAggregator
from contabil.domain.balance_sheet import compute_balance_sheet
from contabil.domain.drilldown import children_of
from contabil.domain.entities import AccountKind, UnmappedSummary
from contabil.domain.income_statement import compute_all_months, compute_income_statement

__all__ = [
    "compute_income_statement",
    "compute_all_months",
    "compute_balance_sheet",
    "drill_down",
    "get_unmapped_summary",
]


def drill_down(movements: Iterable[Any], category: Any, accounts: Iterable[Any] = ()) -> list[Any]:
    """Return the leaf rows feeding a category's total."""
    return children_of(category, movements, accounts)


def get_unmapped_summary(
    accounts: Iterable[Any], movements: Optional[Iterable[Any]] = None
) -> UnmappedSummary:
    """Summarize mapping coverage.

    Counts the leaf rows of the movement set, each resolved with the chart
    of accounts as fallback. Without movements, counts the analytic
    accounts of the chart by their own report category.

    Args:
        accounts: Chart of accounts for the client
        movements: Ledger rows for one period, if any were imported

    Returns:
        UnmappedSummary with the unmapped rows in input order
    """
    accounts = list(accounts or ())
    rows = list(movements or ())

    if rows:
        aggregator = PeriodAggregator(rows, accounts)
        unmapped = tuple(aggregator.unmapped_rows)
        total = aggregator.leaf_count
        return UnmappedSummary(total=total, mapped=total - len(unmapped), unmapped=unmapped)

    analytic = [account for account in accounts if account.kind == AccountKind.ANALYTIC]
    unmapped = tuple(account for account in analytic if not account.is_mapped)
    return UnmappedSummary(total=len(analytic), mapped=len(analytic) - len(unmapped), unmapped=unmapped)
