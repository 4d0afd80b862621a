"""Financial statement report commands."""

import click
from contabil.cli.client_resolution import resolve_client_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.catalog import BalanceGroup
from contabil.domain.client import ClientService
from contabil.domain.entities import IncomeStatement
from contabil.domain.income_statement import INCOME_STATEMENT_LINES
from contabil.domain.report import ReportService
from contabil.utils.formatting import format_brl, format_number, format_percent

MONTH_NAMES = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]

GROUP_CHOICES = {
    "current-assets": BalanceGroup.CURRENT_ASSETS,
    "non-current-assets": BalanceGroup.NON_CURRENT_ASSETS,
    "current-liabilities": BalanceGroup.CURRENT_LIABILITIES,
    "non-current-liabilities": BalanceGroup.NON_CURRENT_LIABILITIES,
    "equity": BalanceGroup.EQUITY,
}

RATIO_LABELS = {
    "current_liquidity": "Liquidez Corrente",
    "immediate_liquidity": "Liquidez Imediata",
    "quick_liquidity": "Liquidez Seca",
    "general_liquidity": "Liquidez Geral",
    "indebtedness": "Endividamento (%)",
    "asset_turnover": "Giro do Ativo",
    "inventory_turnover": "Rotação de Estoques",
    "days_of_inventory": "Prazo Médio de Estoque (dias)",
    "days_sales_outstanding": "PMC (dias)",
    "days_payable_outstanding": "PMP (dias)",
    "cash_cycle": "Ciclo Financeiro (dias)",
    "return_on_assets": "ROA (%)",
    "return_on_equity": "ROE (%)",
    "return_on_invested_capital": "ROIC (%)",
    "gross_margin": "Margem Bruta (%)",
    "net_margin": "Margem Líquida (%)",
    "ebitda_margin": "Margem EBITDA (%)",
}


def _year_and_month(func):
    func = click.option(
        "--month", type=click.IntRange(1, 12), required=True, help="Month (1-12)"
    )(func)
    func = click.option("--year", type=int, required=True, help="Fiscal year")(func)
    return func


def _echo_income_statement(statement: IncomeStatement) -> None:
    month = MONTH_NAMES[statement.month]
    gross_revenue = statement.value("gross_revenue")
    click.echo(f"\n{'Demonstração do Resultado':<45} {month:>18} {'%':>6} {'Acumulado':>18}")
    click.echo("-" * 90)
    for result in statement.lines:
        label = result.line.label if result.line.style in ("main", "highlight") else f"  {result.line.label}"
        click.echo(
            f"{label:<45} {format_brl(result.value):>18} "
            f"{format_percent(result.value, gross_revenue):>6} {format_brl(result.accumulated):>18}"
        )
        if result.line.style == "highlight":
            click.echo("-" * 90)
    if statement.unmapped_count:
        click.echo(f"\n{statement.unmapped_count} ledger rows are unmapped and not included", err=True)


@click.group()
def report_group():
    """Produce financial statements."""
    pass


@report_group.command("income")
@click.argument("client", metavar="CLIENT")
@_year_and_month
@click.pass_context
def income_report(ctx, client: str, year: int, month: int):
    """Show the Income Statement (DRE) for a month with year-to-date totals.

    Examples:
        contabil report income "Padaria Central" --year 2024 --month 3
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = ReportService(db)

    try:
        statement = service.income_statement(client_id, year, month - 1)
        revenue_growth = service.line_growth(client_id, year, "gross_revenue", month - 1)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_income_statement(statement)
    if revenue_growth is not None:
        click.echo(f"\nCrescimento da receita bruta: {format_number(revenue_growth, 1)}%")


@report_group.command("monthly")
@click.argument("client", metavar="CLIENT")
@click.option("--year", type=int, required=True, help="Fiscal year")
@click.pass_context
def monthly_report(ctx, client: str, year: int):
    """Show every Income Statement line month by month."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    try:
        statements = ReportService(db).income_statement_by_month(client_id, year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    header = "".join(f"{name:>14}" for name in MONTH_NAMES)
    click.echo(f"\n{'Linha':<40}{header}")
    click.echo("-" * (40 + 14 * len(MONTH_NAMES)))
    for line in INCOME_STATEMENT_LINES:
        cells = "".join(f"{format_number(s.value(line.id)):>14}" for s in statements)
        click.echo(f"{line.label[:39]:<40}{cells}")


@report_group.command("balance")
@click.argument("client", metavar="CLIENT")
@_year_and_month
@click.pass_context
def balance_report(ctx, client: str, year: int, month: int):
    """Show Balance Sheet group totals, ratios and health indicators.

    Examples:
        contabil report balance "Padaria Central" --year 2024 --month 12
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    try:
        sheet = ReportService(db).balance_sheet(client_id, year, month - 1)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\n{'Balanço Patrimonial':<45} {MONTH_NAMES[sheet.month]:>18}")
    click.echo("-" * 64)
    for group in BalanceGroup:
        click.echo(f"{group.value:<45} {format_brl(sheet.groups[group]):>18}")
    click.echo("-" * 64)
    click.echo(f"{'Total do Ativo':<45} {format_brl(sheet.total_assets):>18}")
    click.echo(f"{'Total do Passivo + PL':<45} {format_brl(sheet.total_liabilities_and_equity):>18}")
    if not sheet.is_balanced():
        click.echo(f"{'Diferença':<45} {format_brl(sheet.difference):>18}")

    click.echo("\nIndicadores")
    click.echo("-" * 64)
    for name, value in sheet.ratios.items():
        click.echo(f"{RATIO_LABELS.get(name, name):<45} {format_number(value):>18}")

    if sheet.indicators:
        click.echo("\nSaúde financeira")
        click.echo("-" * 64)
        for indicator in sheet.indicators:
            click.echo(f"{indicator.label:<45} {indicator.status.value:>18}")


@report_group.command("drill")
@click.argument("client", metavar="CLIENT")
@_year_and_month
@click.option("--line", "line_id", help="Income Statement line id (e.g. admin_expenses)")
@click.option("--group", type=click.Choice(list(GROUP_CHOICES)), help="Balance Sheet group")
@click.pass_context
def drill_report(ctx, client: str, year: int, month: int, line_id: str | None, group: str | None):
    """List the ledger rows behind a statement line or balance group.

    Examples:
        contabil report drill "Padaria Central" --year 2024 --month 3 --line admin_expenses
        contabil report drill 1 --year 2024 --month 12 --group current-assets
    """
    if (line_id is None) == (group is None):
        click.echo("Error: Specify exactly one of --line or --group.", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = ReportService(db)

    try:
        if line_id is not None:
            entries = service.drill_down_line(client_id, year, line_id, month - 1)
        else:
            entries = service.drill_down_group(client_id, year, GROUP_CHOICES[group], month - 1)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not entries:
        click.echo("No rows found.")
        return

    click.echo(f"\n{'Code':<20} {'Name':<40} {MONTH_NAMES[month - 1]:>18} {'Year total':>18}")
    click.echo("-" * 99)
    for entry in entries:
        click.echo(
            f"{entry.code:<20} {entry.name[:40]:<40} {format_brl(entry.month_value):>18} {format_brl(entry.total):>18}"
        )
    click.echo("-" * 99)
    month_total = sum(e.month_value for e in entries)
    click.echo(f"{'TOTAL':<61} {format_brl(month_total):>18}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
