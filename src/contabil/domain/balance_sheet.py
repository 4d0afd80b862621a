"""Balance Sheet group totals and ratios.

Rows reach a group either because their category is the group label itself
(grouped exports tag every row with "ATIVO CIRCULANTE", "PASSIVO NÃO
CIRCULANTE", ...) or because their resolved category belongs to the group
(coded ledgers tag rows with "Disponivel", "Fornecedores", ...).
"""

from typing import Any, Iterable, Optional

from contabil.domain.aggregation import PeriodAggregator, check_month, month_value
from contabil.domain.catalog import BalanceGroup, CanonicalCategory
from contabil.domain.entities import BalanceSheet, IncomeStatement
from contabil.domain.hierarchy import code_of, field_of, select_leaves
from contabil.domain.income_statement import compute_income_statement
from contabil.domain.resolver import normalize_label
from contabil.domain import ratios as r
from contabil.domain.signs import magnitude, normalize
from contabil.utils.amount_parser import MONTHS_PER_YEAR

_GROUP_LABELS = {group: normalize_label(group.value) for group in BalanceGroup}

RATIO_COMPONENTS = (
    CanonicalCategory.CASH,
    CanonicalCategory.RECEIVABLES,
    CanonicalCategory.INVENTORY,
    CanonicalCategory.SUPPLIERS,
)


def is_group_header(row: Any, group: BalanceGroup) -> bool:
    """Return True for the row that carries a group's own rollup total."""
    label = _GROUP_LABELS[group]
    name = str(field_of(row, "name") or "")
    return normalize_label(code_of(row)) == label or normalize_label(name) == label


class BalanceGrouping:
    """Leaf rows and monthly totals of the five balance groups.

    Leaves are selected across the whole group, then summed per category and
    read with that category's polarity. The group total is the magnitude of
    the normalized category totals, so a category exported with the opposite
    sign adds to its group instead of cancelling against its neighbours.
    """

    def __init__(self, aggregator: PeriodAggregator):
        members: dict[BalanceGroup, list[tuple[Any, CanonicalCategory]]] = {
            group: [] for group in BalanceGroup
        }
        unassigned = 0
        for row, category in aggregator.assignments:
            group = category.balance_group if category is not None else None
            if group is None:
                unassigned += 1
                continue
            members[group].append((row, category))

        self.unassigned_count = unassigned
        self._leaves: dict[BalanceGroup, list[Any]] = {}
        self._category_totals: dict[BalanceGroup, dict[CanonicalCategory, tuple[float, ...]]] = {}
        self._totals: dict[BalanceGroup, tuple[float, ...]] = {}
        for group, pairs in members.items():
            details = [pair for pair in pairs if not is_group_header(pair[0], group)]
            leaves = select_leaves(details if details else pairs, key=lambda pair: code_of(pair[0]))
            self._leaves[group] = [row for row, _ in leaves]

            raw: dict[CanonicalCategory, list[float]] = {}
            for row, category in leaves:
                sums = raw.setdefault(category, [0.0] * MONTHS_PER_YEAR)
                for m in range(MONTHS_PER_YEAR):
                    sums[m] += month_value(row, m)
            normalized = {
                category: tuple(normalize(category, value) for value in sums)
                for category, sums in raw.items()
            }
            self._category_totals[group] = normalized
            self._totals[group] = tuple(
                magnitude(sum(values[m] for values in normalized.values()))
                for m in range(MONTHS_PER_YEAR)
            )

    def leaves(self, group: BalanceGroup) -> list[Any]:
        return list(self._leaves[group])

    def component(self, category: CanonicalCategory, month: int) -> float:
        """Return the magnitude of one balance category for a month.

        Grouped exports tag rows with the group label only, so when no row
        resolved to the category the group's leaves are matched by name.
        """
        check_month(month)
        group = category.balance_group
        if group is None:
            return 0.0
        values = self._category_totals[group].get(category)
        if values is not None:
            return magnitude(values[month])
        label = normalize_label(category.value)
        named = [
            row for row in self._leaves[group]
            if label in normalize_label(str(field_of(row, "name") or ""))
        ]
        return magnitude(sum(month_value(row, month) for row in named))

    def total(self, group: BalanceGroup, month: int) -> float:
        """Return the group's magnitude for a month."""
        check_month(month)
        return self._totals[group][month]


def balance_ratios(
    groups: dict[BalanceGroup, float],
    income: Optional[IncomeStatement],
    components: Optional[dict[CanonicalCategory, float]] = None,
) -> dict[str, float]:
    """Compute liquidity, leverage, turnover, term and profitability ratios.

    Args:
        groups: Group magnitudes for the month
        income: Income Statement of the same month, if any
        components: Magnitudes of Disponivel, Clientes, Estoques and Fornecedores
    """
    components = components or {}
    current_assets = groups[BalanceGroup.CURRENT_ASSETS]
    current_liabilities = groups[BalanceGroup.CURRENT_LIABILITIES]
    non_current_liabilities = groups[BalanceGroup.NON_CURRENT_LIABILITIES]
    equity = groups[BalanceGroup.EQUITY]
    total_assets = current_assets + groups[BalanceGroup.NON_CURRENT_ASSETS]
    cash = components.get(CanonicalCategory.CASH, 0.0)
    receivables = components.get(CanonicalCategory.RECEIVABLES, 0.0)
    inventory = components.get(CanonicalCategory.INVENTORY, 0.0)
    suppliers = components.get(CanonicalCategory.SUPPLIERS, 0.0)

    def line(line_id: str) -> float:
        return income.value(line_id) if income is not None else 0.0

    costs = line("cost_of_sales") + line("cost_of_services")
    turnover = r.inventory_turnover(costs, inventory)
    collection_days = r.days_sales_outstanding(receivables, line("net_revenue"))
    payment_days = r.days_payable_outstanding(suppliers, costs)

    return {
        "current_liquidity": r.current_liquidity(current_assets, current_liabilities),
        "immediate_liquidity": r.immediate_liquidity(cash, current_liabilities),
        "quick_liquidity": r.quick_liquidity(current_assets, inventory, current_liabilities),
        "general_liquidity": r.general_liquidity(total_assets, current_liabilities + non_current_liabilities),
        "indebtedness": r.indebtedness(current_liabilities, non_current_liabilities, total_assets),
        "asset_turnover": r.asset_turnover(line("net_revenue"), total_assets),
        "inventory_turnover": turnover,
        "days_of_inventory": r.days_of_inventory(turnover),
        "days_sales_outstanding": collection_days,
        "days_payable_outstanding": payment_days,
        "cash_cycle": r.cash_cycle(collection_days, payment_days),
        "return_on_assets": r.return_on_assets(line("net_result"), total_assets),
        "return_on_equity": r.return_on_equity(line("net_result"), equity),
        "return_on_invested_capital": r.return_on_invested_capital(line("pre_tax_result"), total_assets),
        "gross_margin": r.gross_margin(line("gross_profit"), line("net_revenue")),
        "net_margin": r.net_margin(line("net_result"), line("gross_revenue")),
        "ebitda_margin": r.ebitda_margin(line("ebitda"), line("net_revenue")),
    }


def build_balance_sheet(
    aggregator: PeriodAggregator, month: int, income: Optional[IncomeStatement] = None
) -> BalanceSheet:
    """Build the Balance Sheet for one month from a prepared aggregator."""
    check_month(month)
    grouping = BalanceGrouping(aggregator)
    groups = {group: grouping.total(group, month) for group in BalanceGroup}
    components = {
        category: grouping.component(category, month)
        for category in RATIO_COMPONENTS
    }
    ratios = balance_ratios(groups, income, components)
    return BalanceSheet(
        month=month,
        groups=groups,
        ratios=ratios,
        indicators=r.assess(ratios),
        unassigned_count=grouping.unassigned_count,
    )


def compute_balance_sheet(
    movements: Iterable[Any],
    month: int,
    accounts: Iterable[Any] = (),
    income_movements: Optional[Iterable[Any]] = None,
    income: Optional[IncomeStatement] = None,
) -> BalanceSheet:
    """Compute the Balance Sheet for a zero-based month index.

    Args:
        movements: Balance ledger rows for one client and year
        month: Month index, 0 for January
        accounts: Chart of accounts used as category fallback
        income_movements: Income rows for the same period, for profitability ratios
        income: Already computed Income Statement, used instead of income_movements
    """
    accounts = list(accounts or ())
    if income is None and income_movements is not None:
        income = compute_income_statement(income_movements, month, accounts)
    return build_balance_sheet(PeriodAggregator(movements, accounts), month, income)
