"""Tests for ReportService."""

import pytest

from conftest import make_movement, monthly
from contabil.domain.catalog import BalanceGroup, CanonicalCategory, StatementType
from contabil.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def balance_rows():
    def row(code, category, value):
        return make_movement(code, category, monthly(value), statement_type=StatementType.BALANCE)

    return [
        row("01.1.1", "Disponivel", 1500),
        row("01.2.1", "Imobilizado", 500),
        row("02.1.1", "Fornecedores", -1000),
        row("02.3.1", "Reserva De Lucros", -1000),
    ]


def test_income_statement(report_service, loaded_client):
    statement = report_service.income_statement(loaded_client.id, 2024, 2)

    assert statement.month == 2
    assert statement.value("gross_profit") == 600
    assert statement.value("net_result") == 500
    assert statement.accumulated("net_result") == 1500


def test_income_statement_reuses_aggregation(report_service, loaded_client):
    """Every month of a period is served by the same cached aggregation."""
    first = report_service.aggregator(loaded_client.id, 2024, StatementType.INCOME)
    report_service.income_statement(loaded_client.id, 2024, 5)
    assert report_service.aggregator(loaded_client.id, 2024, "dre") is first


def test_income_statement_by_month(report_service, loaded_client):
    statements = report_service.income_statement_by_month(loaded_client.id, 2024)
    assert len(statements) == 12
    assert statements[-1].accumulated("gross_revenue") == 12000


def test_income_statement_without_movements(report_service, sample_client):
    """A period with nothing imported gives a zero statement."""
    statement = report_service.income_statement(sample_client.id, 2024, 0)
    assert statement.value("net_result") == 0


def test_income_statement_invalid_month(report_service, loaded_client):
    with pytest.raises(ValidationError):
        report_service.income_statement(loaded_client.id, 2024, 12)


def test_income_statement_unknown_client(report_service):
    with pytest.raises(NotFoundError):
        report_service.income_statement(99, 2024, 0)


def test_balance_sheet(report_service, movement_service, loaded_client, balance_rows):
    movement_service.replace_movements(loaded_client.id, 2024, StatementType.BALANCE, balance_rows)

    sheet = report_service.balance_sheet(loaded_client.id, 2024, 0)

    assert sheet.total_assets == 2000
    assert sheet.is_balanced()
    assert sheet.ratios["current_liquidity"] == pytest.approx(1.5)
    # Net result 500 over equity 1000
    assert sheet.ratios["return_on_equity"] == pytest.approx(50)


def test_line_growth(report_service, movement_service, sample_client):
    movement_service.replace_movements(
        sample_client.id, 2024, StatementType.INCOME,
        [make_movement("03.1", "Receita Bruta", [100, 150, 150])],
    )

    assert report_service.line_growth(sample_client.id, 2024, "gross_revenue", 0) is None
    assert report_service.line_growth(sample_client.id, 2024, "gross_revenue", 1) == pytest.approx(50)
    assert report_service.line_growth(sample_client.id, 2024, "gross_revenue", 2) == pytest.approx(0)
    assert report_service.line_growth(sample_client.id, 2024, "gross_revenue", 3) == pytest.approx(-100)
    assert report_service.line_growth(sample_client.id, 2024, "gross_revenue", 4) is None
    with pytest.raises(NotFoundError):
        report_service.line_growth(sample_client.id, 2024, "lucro", 1)


def test_category_totals(report_service, loaded_client):
    totals = report_service.category_totals(loaded_client.id, 2024, StatementType.INCOME)

    assert list(totals) == [
        CanonicalCategory.REVENUE_GROSS,
        CanonicalCategory.COST_OF_SALES,
        CanonicalCategory.ADMIN_EXPENSES,
    ]
    assert totals[CanonicalCategory.REVENUE_GROSS] == tuple([1000.0] * 12)


def test_drill_down_line(report_service, loaded_client):
    entries = report_service.drill_down_line(loaded_client.id, 2024, "gross_revenue", 0)
    assert [e.code for e in entries] == ["03.1"]
    assert sum(e.month_value for e in entries) == 1000


def test_drill_down_group(report_service, movement_service, loaded_client, balance_rows):
    movement_service.replace_movements(loaded_client.id, 2024, StatementType.BALANCE, balance_rows)

    entries = report_service.drill_down_group(loaded_client.id, 2024, BalanceGroup.EQUITY, 0)
    assert [e.code for e in entries] == ["02.3.1"]


def test_drill_down_category(report_service, loaded_client):
    entries = report_service.drill_down_category(
        loaded_client.id, 2024, StatementType.INCOME, "Despesas Administrativas", 0
    )
    assert [e.code for e in entries] == ["04.2"]
