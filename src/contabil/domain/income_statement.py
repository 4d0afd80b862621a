"""Income Statement (DRE) layout and formula evaluation."""

from typing import Any, Callable, Iterable, Optional

from contabil.domain.aggregation import PeriodAggregator, check_month
from contabil.domain.catalog import CanonicalCategory, Polarity
from contabil.domain.entities import IncomeStatement, LineResult, LineRole, StatementLine
from contabil.domain.ratios import percent_of
from contabil.domain.signs import apply_polarity
from contabil.utils.amount_parser import MONTHS_PER_YEAR


def _bound(line_id: str, label: str, polarity: Polarity, category: CanonicalCategory, style: str = "detail") -> StatementLine:
    return StatementLine(
        id=line_id, label=label, role=LineRole.CATEGORY, polarity=polarity, category=category, style=style
    )


def _computed(line_id: str, label: str, style: str = "main") -> StatementLine:
    return StatementLine(id=line_id, label=label, role=LineRole.COMPUTED, style=style)


P, N = Polarity.POSITIVE, Polarity.NEGATIVE
C = CanonicalCategory

INCOME_STATEMENT_LINES: tuple[StatementLine, ...] = (
    _bound("gross_revenue", "Receita Bruta", P, C.REVENUE_GROSS, "main"),
    _bound("deductions", "Deduções", N, C.DEDUCTIONS),
    _computed("net_revenue", "Receita Líquida"),
    _bound("cost_of_sales", "Custos Das Vendas", N, C.COST_OF_SALES),
    _bound("cost_of_services", "Custos Dos Serviços", N, C.COST_OF_SERVICES),
    _computed("gross_profit", "Lucro Bruto"),
    _bound("admin_expenses", "Despesas Administrativas", N, C.ADMIN_EXPENSES),
    _bound("sales_expenses", "Despesas Comerciais", N, C.SALES_EXPENSES),
    _bound("tax_expenses", "Despesas Tributárias", N, C.TAX_EXPENSES),
    _bound("equity_result", "Resultado Participações Societárias", P, C.EQUITY_METHOD_RESULT),
    _bound("other_revenue", "Outras Receitas", P, C.OTHER_REVENUE),
    _bound("financial_revenue", "Receitas Financeiras", P, C.FINANCIAL_REVENUE),
    _bound("financial_expenses", "Despesas Financeiras", N, C.FINANCIAL_EXPENSES),
    _computed("pre_tax_result", "Lucro Antes do IRPJ e CSLL"),
    _bound("income_tax", "IRPJ e CSLL", N, C.INCOME_TAX),
    _computed("net_result", "Lucro/Prejuízo Líquido", "highlight"),
    _bound("depreciation", "(+) Depreciação e Amortização", N, C.DEPRECIATION, "sub"),
    _computed("financial_net", "(+) Resultado Financeiro", "sub"),
    _computed("ebitda", "Resultado EBITDA", "highlight"),
)

del P, N, C

LINES_BY_ID = {line.id: line for line in INCOME_STATEMENT_LINES}


def evaluate(read: Callable[[CanonicalCategory], float]) -> dict[str, float]:
    """Evaluate every line from raw category totals.

    Args:
        read: Returns the raw (unsigned) total of a category for the period

    Returns:
        Line id to signed value
    """
    v: dict[str, float] = {}
    for line in INCOME_STATEMENT_LINES:
        if line.role == LineRole.CATEGORY:
            v[line.id] = apply_polarity(line.polarity, read(line.category))

    v["net_revenue"] = v["gross_revenue"] + v["deductions"]
    v["gross_profit"] = v["net_revenue"] + v["cost_of_sales"] + v["cost_of_services"]
    v["pre_tax_result"] = (
        v["gross_profit"]
        + v["admin_expenses"]
        + v["sales_expenses"]
        + v["tax_expenses"]
        + v["equity_result"]
        + v["other_revenue"]
        + v["financial_revenue"]
        + v["financial_expenses"]
    )
    v["net_result"] = v["pre_tax_result"] + v["income_tax"]
    v["financial_net"] = v["financial_revenue"] + v["financial_expenses"]
    v["ebitda"] = v["pre_tax_result"] + abs(v["depreciation"]) + v["financial_net"]
    return v


def build_income_statement(aggregator: PeriodAggregator, month: int) -> IncomeStatement:
    """Build the statement for one month from a prepared aggregator.

    ``accumulated`` is year-to-date: January through ``month``.
    """
    check_month(month)
    monthly = evaluate(lambda category: aggregator.sum_category(category, month))
    to_date = evaluate(lambda category: aggregator.accumulate(category, month))
    gross_revenue = monthly["gross_revenue"]

    lines = tuple(
        LineResult(
            line=line,
            value=monthly[line.id],
            accumulated=to_date[line.id],
            percent_of_revenue=percent_of(monthly[line.id], gross_revenue),
        )
        for line in INCOME_STATEMENT_LINES
    )
    return IncomeStatement(month=month, lines=lines, unmapped_count=len(aggregator.unmapped_rows))


def compute_income_statement(
    movements: Iterable[Any],
    month: int,
    accounts: Iterable[Any] = (),
    aggregator: Optional[PeriodAggregator] = None,
) -> IncomeStatement:
    """Compute the Income Statement for a zero-based month index.

    Args:
        movements: Income ledger rows for one client and year
        month: Month index, 0 for January
        accounts: Chart of accounts used as category fallback
        aggregator: Reuse an aggregator already built over the same rows
    """
    if aggregator is None:
        aggregator = PeriodAggregator(movements, accounts)
    return build_income_statement(aggregator, month)


def compute_all_months(
    movements: Iterable[Any], accounts: Iterable[Any] = ()
) -> list[IncomeStatement]:
    """Compute the twelve monthly statements from a single aggregation."""
    aggregator = PeriodAggregator(movements, accounts)
    return [build_income_statement(aggregator, month) for month in range(MONTHS_PER_YEAR)]
