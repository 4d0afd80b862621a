"""Statement line to ledger row drill-down.

Drill-down reads the same leaf sets the aggregator sums, so the entries of a
line always add up to the line's raw total.
"""

from typing import Any, Iterable, Optional

from contabil.domain.aggregation import PeriodAggregator, check_month, month_value, values_of
from contabil.domain.balance_sheet import BalanceGrouping
from contabil.domain.catalog import BalanceGroup
from contabil.domain.entities import DrillDownEntry, LineRole
from contabil.domain.errors import NotFoundError, line_not_found
from contabil.domain.income_statement import LINES_BY_ID
from contabil.utils.amount_parser import coerce_monthly_values


def entry_for(row: Any, month: int) -> DrillDownEntry:
    """Wrap a ledger row with its monthly vector and one month's value."""
    return DrillDownEntry(
        row=row,
        values=coerce_monthly_values(values_of(row)),
        month_value=month_value(row, month),
    )


def children_of(category: Any, rows: Iterable[Any], accounts: Iterable[Any] = ()) -> list[Any]:
    """Return the leaf rows summed for a category."""
    return PeriodAggregator(rows, accounts).leaves(category)


def drill_down_line(
    line_id: str,
    rows: Iterable[Any],
    month: int,
    accounts: Iterable[Any] = (),
    aggregator: Optional[PeriodAggregator] = None,
) -> list[DrillDownEntry]:
    """List the ledger rows behind one Income Statement line.

    Args:
        line_id: Statement line id, e.g. "admin_expenses"
        rows: Income ledger rows
        month: Zero-based month index used for ``month_value``
        accounts: Chart of accounts used as category fallback
        aggregator: Reuse an aggregator already built over the same rows

    Returns:
        One entry per contributing leaf row; computed lines have none

    Raises:
        NotFoundError: If the line id is not part of the layout
    """
    line = LINES_BY_ID.get(line_id)
    if line is None:
        raise NotFoundError(line_not_found(line_id))
    check_month(month)
    if line.role == LineRole.COMPUTED:
        return []
    if aggregator is None:
        aggregator = PeriodAggregator(rows, accounts)
    return [entry_for(row, month) for row in aggregator.leaves(line.category)]


def drill_down_group(
    group: BalanceGroup,
    rows: Iterable[Any],
    month: int,
    accounts: Iterable[Any] = (),
    aggregator: Optional[PeriodAggregator] = None,
) -> list[DrillDownEntry]:
    """List the ledger rows behind one Balance Sheet group."""
    check_month(month)
    if aggregator is None:
        aggregator = PeriodAggregator(rows, accounts)
    return [entry_for(row, month) for row in BalanceGrouping(aggregator).leaves(group)]


def drill_down_category(
    category: Any,
    rows: Iterable[Any],
    month: int,
    accounts: Iterable[Any] = (),
    aggregator: Optional[PeriodAggregator] = None,
) -> list[DrillDownEntry]:
    """List the leaf rows of any category, bound to a line or not."""
    check_month(month)
    if aggregator is None:
        aggregator = PeriodAggregator(rows, accounts)
    return [entry_for(row, month) for row in aggregator.leaves(category)]
