"""Category assignment and period aggregation.

Every ledger row is assigned at most one canonical category:

1. the row's own ``category`` (tagged by the ledger export), if it resolves;
2. otherwise the ``report_category`` of the chart-of-accounts entry with the
   same code, if it resolves;
3. otherwise the row is unmapped and feeds no statement line.

Within a category only leaf rows are summed (see ``hierarchy.select_leaves``).
"""

from typing import Any, Iterable, Optional, Sequence

from contabil.domain.catalog import CanonicalCategory
from contabil.domain.errors import ValidationError, invalid_month
from contabil.domain.hierarchy import code_of, field_of, select_leaves
from contabil.domain.resolver import resolve
from contabil.domain.signs import normalize
from contabil.utils.amount_parser import MONTHS_PER_YEAR, coerce_amount

LAST_MONTH = MONTHS_PER_YEAR - 1


def check_month(month_index: int) -> int:
    """Validate a zero-based month index.

    Raises:
        ValidationError: If the index is outside 0..11
    """
    if not isinstance(month_index, int) or not 0 <= month_index <= LAST_MONTH:
        raise ValidationError(invalid_month(month_index))
    return month_index


def values_of(row: Any) -> Sequence[Any]:
    """Return the monthly values of a movement or import row."""
    if isinstance(row, dict):
        values = row.get("monthly_values", row.get("values"))
    else:
        values = getattr(row, "monthly_values", None)
        if values is None:
            values = getattr(row, "values", None)
    return values or ()


def month_value(row: Any, month_index: int) -> float:
    values = values_of(row)
    if month_index < len(values):
        return coerce_amount(values[month_index])
    return 0.0


def index_accounts(accounts: Iterable[Any]) -> dict[str, Any]:
    """Index chart-of-accounts entries by trimmed code."""
    return {code_of(account): account for account in accounts or ()}


def assign_category(row: Any, accounts_by_code: dict[str, Any]) -> Optional[CanonicalCategory]:
    """Resolve the category of one ledger row with chart-of-accounts fallback."""
    category = resolve(field_of(row, "category"))
    if category is not None:
        return category
    account = accounts_by_code.get(code_of(row))
    if account is None:
        return None
    return resolve(field_of(account, "report_category"))


def as_category(category: Any) -> Optional[CanonicalCategory]:
    """Accept a CanonicalCategory or any resolvable label."""
    return resolve(category)


class PeriodAggregator:
    """Per-category leaf sets and monthly totals for one movement set.

    Built once per request; the per-month and accumulated views both read
    from the same precomputed totals.
    """

    def __init__(self, movements: Iterable[Any], accounts: Iterable[Any] = ()):
        """Initialize the aggregator.

        Args:
            movements: Ledger rows for one client, year and statement type
            accounts: Chart-of-accounts entries used as category fallback
        """
        self.movements = list(movements)
        accounts_by_code = index_accounts(accounts)

        assigned: dict[CanonicalCategory, list[Any]] = {}
        unmapped: list[Any] = []
        self._all_leaves = select_leaves(self.movements)
        leaf_ids = {id(row) for row in self._all_leaves}
        self._assignments: list[tuple[Any, Optional[CanonicalCategory]]] = []
        for row in self.movements:
            category = assign_category(row, accounts_by_code)
            self._assignments.append((row, category))
            if category is None:
                if id(row) in leaf_ids:
                    unmapped.append(row)
            else:
                assigned.setdefault(category, []).append(row)

        self._assigned = assigned
        self._unmapped = unmapped
        self._leaves = {category: select_leaves(rows) for category, rows in assigned.items()}
        self._totals = {
            category: tuple(
                sum(month_value(row, m) for row in leaves) for m in range(MONTHS_PER_YEAR)
            )
            for category, leaves in self._leaves.items()
        }

    @property
    def assignments(self) -> list[tuple[Any, Optional[CanonicalCategory]]]:
        """Every row paired with its assigned category (None when unmapped)."""
        return list(self._assignments)

    @property
    def unmapped_rows(self) -> list[Any]:
        """Leaf rows with no category, in input order."""
        return list(self._unmapped)

    @property
    def leaf_count(self) -> int:
        """Number of leaf rows across the whole movement set."""
        return len(self._all_leaves)

    def categories(self) -> list[CanonicalCategory]:
        """Return the categories with at least one row, in taxonomy order."""
        return [c for c in CanonicalCategory if c in self._assigned]

    def rows_for(self, category: Any) -> list[Any]:
        """Return every row assigned to a category, leaves or not."""
        resolved = as_category(category)
        return list(self._assigned.get(resolved, ())) if resolved else []

    def leaves(self, category: Any) -> list[Any]:
        """Return the leaf rows summed for a category."""
        resolved = as_category(category)
        return list(self._leaves.get(resolved, ())) if resolved else []

    def monthly_totals(self, category: Any) -> tuple[float, ...]:
        """Return the twelve raw leaf sums of a category."""
        resolved = as_category(category)
        if resolved is None:
            return (0.0,) * MONTHS_PER_YEAR
        return self._totals.get(resolved, (0.0,) * MONTHS_PER_YEAR)

    def sum_category(self, category: Any, month_index: int) -> float:
        """Return the raw leaf sum of a category for one month."""
        check_month(month_index)
        return self.monthly_totals(category)[month_index]

    def accumulate(self, category: Any, through_month: int = LAST_MONTH) -> float:
        """Return the raw leaf sum of a category from January through a month."""
        check_month(through_month)
        return sum(self.monthly_totals(category)[: through_month + 1])

    def signed(self, category: CanonicalCategory, month_index: int) -> float:
        """Return a month total read with the category's declared polarity."""
        return normalize(category, self.sum_category(category, month_index))

    def signed_accumulated(self, category: CanonicalCategory, through_month: int = LAST_MONTH) -> float:
        """Return a year-to-date total read with the category's declared polarity."""
        return normalize(category, self.accumulate(category, through_month))


def sum_category(
    category: Any, month_index: int, rows: Iterable[Any], accounts: Iterable[Any] = ()
) -> float:
    """Sum one month of the leaf rows resolving to a category."""
    return PeriodAggregator(rows, accounts).sum_category(category, month_index)


def accumulate(
    category: Any,
    rows: Iterable[Any],
    accounts: Iterable[Any] = (),
    through_month: int = LAST_MONTH,
) -> float:
    """Sum the leaf rows resolving to a category across months."""
    return PeriodAggregator(rows, accounts).accumulate(category, through_month)
