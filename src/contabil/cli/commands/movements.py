"""Ledger movement commands."""

import click
from contabil.cli.client_resolution import resolve_client_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.client import ClientService
from contabil.domain.ledger_import import LAYOUTS, LedgerImportService
from contabil.domain.movement import MovementService
from contabil.utils.formatting import format_brl

STATEMENT_CHOICES = ["income", "balance", "dre", "patrimonial"]


@click.group()
def movements_group():
    """Import and inspect monthly ledger balances."""
    pass


@movements_group.command("import")
@click.argument("client", metavar="CLIENT")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--year", type=int, required=True, help="Fiscal year of the file")
@click.option(
    "--type",
    "statement_type",
    type=click.Choice(STATEMENT_CHOICES, case_sensitive=False),
    required=True,
    help="Statement the file feeds",
)
@click.option(
    "--layout",
    type=click.Choice(LAYOUTS),
    default="auto",
    show_default=True,
    help="coded: code, name, 12 months, level, category; grouped: Balance Sheet export by group label",
)
@click.pass_context
def import_movements(ctx, client: str, csv_file: str, year: int, statement_type: str, layout: str):
    """Replace one year's movements from a ledger CSV file.

    Every movement previously imported for the same client, year and
    statement is removed first.

    Examples:
        contabil movements import "Padaria Central" balancete_2024.csv --year 2024 --type income
        contabil movements import 1 patrimonial.csv --year 2024 --type balance --layout grouped
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = LedgerImportService(db)

    try:
        result = service.import_ledger(client_id, year, statement_type, csv_file, layout=layout)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Imported {result['imported']} rows for {year} ({result['layout']} layout)")
    if result["untagged"]:
        click.echo(f"{result['untagged']} rows have no category tag")
    unknown = result["unknown_categories"]
    if unknown:
        sample = ", ".join(unknown[:3])
        extra = f" and {len(unknown) - 3} more" if len(unknown) > 3 else ""
        click.echo(f"Warning: {len(unknown)} unrecognized categories: {sample}{extra}", err=True)


@movements_group.command("list")
@click.argument("client", metavar="CLIENT")
@click.option("--year", type=int, help="Show the rows of one year")
@click.option(
    "--type",
    "statement_type",
    type=click.Choice(STATEMENT_CHOICES, case_sensitive=False),
    help="Statement to show (with --year)",
)
@click.pass_context
def list_movements(ctx, client: str, year: int | None, statement_type: str | None):
    """List imported periods, or the rows of one period."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = MovementService(db)

    if year is None or statement_type is None:
        periods = service.list_periods(client_id)
        if not periods:
            click.echo("No movements found.")
            return
        click.echo(f"\n{'Year':<8} {'Statement':<12} {'Rows':>8}")
        click.echo("-" * 30)
        for period_year, kind, count in periods:
            click.echo(f"{period_year:<8} {kind.value:<12} {count:>8}")
        return

    try:
        movements = service.get_movements(client_id, year, statement_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not movements:
        click.echo("No movements found.")
        return

    click.echo(f"\n{'Code':<20} {'Name':<40} {'Category':<30} {'Year total':>18}")
    click.echo("-" * 111)
    for m in movements:
        click.echo(f"{m.account_code:<20} {m.name[:40]:<40} {(m.category or '-')[:30]:<30} {format_brl(m.total):>18}")


@movements_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--year", type=int, required=True, help="Fiscal year")
@click.option(
    "--type",
    "statement_type",
    type=click.Choice(STATEMENT_CHOICES, case_sensitive=False),
    help="Only this statement (default: both)",
)
@click.pass_context
def delete_movements(ctx, client: str, year: int, statement_type: str | None):
    """Delete the movements of a year."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = MovementService(db)

    try:
        deleted = service.delete_movements(client_id, year, statement_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted {deleted} rows")


def register_commands(cli):
    """Register movement commands with main CLI."""
    cli.add_command(movements_group, name="movements")
