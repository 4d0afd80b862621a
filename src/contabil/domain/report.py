"""Financial statement report service."""

from typing import Optional

from contabil.config.logging import get_logger
from contabil.database.base import Database
from contabil.domain.aggregation import PeriodAggregator, check_month
from contabil.domain.balance_sheet import build_balance_sheet
from contabil.domain.cache import StatementCache, cache_for
from contabil.domain.catalog import BalanceGroup, CanonicalCategory, StatementType
from contabil.domain.client import ClientService
from contabil.domain.drilldown import drill_down_category, drill_down_group, drill_down_line
from contabil.domain.entities import BalanceSheet, DrillDownEntry, IncomeStatement
from contabil.domain.errors import NotFoundError, line_not_found
from contabil.domain.income_statement import LINES_BY_ID, build_income_statement
from contabil.domain.movement import check_year
from contabil.domain.ratios import growth
from contabil.utils.amount_parser import MONTHS_PER_YEAR

logger = get_logger(__name__)


class ReportService:
    """Service computing statements from stored movements.

    One aggregation per (client, year, statement type) is kept in the
    statement cache and serves every month, the year-to-date figures and
    drill-down.
    """

    def __init__(self, db: Database, cache: Optional[StatementCache] = None):
        """Initialize report service.

        Args:
            db: Database instance
            cache: Statement cache; defaults to the one shared per database
        """
        self.db = db
        self.cache = cache if cache is not None else cache_for(db)
        self.client_service = ClientService(db)

    def aggregator(self, client_id: int, year: int, statement_type: StatementType | str) -> PeriodAggregator:
        """Return the (possibly cached) aggregation of one period.

        Raises:
            NotFoundError: If client not found
            ValidationError: If the year is out of range
        """
        self.client_service.require_client(client_id)
        check_year(year)
        kind = StatementType.parse(statement_type)

        def build() -> PeriodAggregator:
            aggregator = PeriodAggregator(
                self.db.get_movements(client_id, year, kind),
                self.db.get_accounts(client_id),
            )
            if aggregator.unmapped_rows:
                logger.info(
                    "unmapped_rows",
                    client_id=client_id,
                    year=year,
                    statement_type=kind.value,
                    count=len(aggregator.unmapped_rows),
                )
            return aggregator

        return self.cache.get_or_build(client_id, year, kind, build)

    def income_statement(self, client_id: int, year: int, month: int) -> IncomeStatement:
        """Compute the Income Statement for a zero-based month."""
        check_month(month)
        return build_income_statement(self.aggregator(client_id, year, StatementType.INCOME), month)

    def income_statement_by_month(self, client_id: int, year: int) -> list[IncomeStatement]:
        """Compute the twelve monthly Income Statements of a year."""
        aggregator = self.aggregator(client_id, year, StatementType.INCOME)
        return [build_income_statement(aggregator, month) for month in range(MONTHS_PER_YEAR)]

    def balance_sheet(self, client_id: int, year: int, month: int) -> BalanceSheet:
        """Compute the Balance Sheet for a zero-based month.

        Profitability ratios read the Income Statement of the same month.
        """
        check_month(month)
        income = self.income_statement(client_id, year, month)
        return build_balance_sheet(self.aggregator(client_id, year, StatementType.BALANCE), month, income)

    def line_growth(self, client_id: int, year: int, line_id: str, month: int) -> Optional[float]:
        """Return month-over-month growth of an Income Statement line in percent.

        None for January or when the previous month is zero.
        """
        if line_id not in LINES_BY_ID:
            raise NotFoundError(line_not_found(line_id))
        check_month(month)
        if month == 0:
            return None
        current = self.income_statement(client_id, year, month).value(line_id)
        previous = self.income_statement(client_id, year, month - 1).value(line_id)
        return growth(current, previous)

    def category_totals(
        self, client_id: int, year: int, statement_type: StatementType | str
    ) -> dict[CanonicalCategory, tuple[float, ...]]:
        """Return the twelve raw leaf sums of every category present in a period."""
        aggregator = self.aggregator(client_id, year, statement_type)
        return {category: aggregator.monthly_totals(category) for category in aggregator.categories()}

    def drill_down_line(self, client_id: int, year: int, line_id: str, month: int) -> list[DrillDownEntry]:
        """List the ledger rows behind an Income Statement line."""
        aggregator = self.aggregator(client_id, year, StatementType.INCOME)
        return drill_down_line(line_id, aggregator.movements, month, aggregator=aggregator)

    def drill_down_group(
        self, client_id: int, year: int, group: BalanceGroup, month: int
    ) -> list[DrillDownEntry]:
        """List the ledger rows behind a Balance Sheet group."""
        aggregator = self.aggregator(client_id, year, StatementType.BALANCE)
        return drill_down_group(group, aggregator.movements, month, aggregator=aggregator)

    def drill_down_category(
        self, client_id: int, year: int, statement_type: StatementType | str, category: str, month: int
    ) -> list[DrillDownEntry]:
        """List the leaf rows summed for any category of a period."""
        aggregator = self.aggregator(client_id, year, statement_type)
        return drill_down_category(category, aggregator.movements, month, aggregator=aggregator)
