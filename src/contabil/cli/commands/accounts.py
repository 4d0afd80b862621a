"""Chart of accounts commands."""

import click
from contabil.cli.client_resolution import resolve_client_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.chart import ChartOfAccountsService
from contabil.domain.client import ClientService
from contabil.domain.entities import AccountKind
from contabil.domain.ledger_import import LedgerImportService
from contabil.domain.resolver import resolve


@click.group()
def accounts_group():
    """Manage the chart of accounts."""
    pass


@accounts_group.command("import")
@click.argument("client", metavar="CLIENT")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_accounts(ctx, client: str, csv_file: str):
    """Replace a client's chart of accounts from a CSV file.

    Expected columns: CLASSIFICADOR, NÍVEL, TIPO, DESCRIÇÃO, Apelido,
    Relatório, DESCRIÇÃO RELATÓRIO. The previous chart is removed; saved
    category mappings are kept and re-applied.

    Examples:
        contabil accounts import "Padaria Central" plano_de_contas.csv
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = LedgerImportService(db)

    try:
        result = service.import_chart(client_id, csv_file)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Imported {result['imported']} accounts")
    if result["unmapped"]:
        click.echo(f"{result['unmapped']} analytic accounts have no report category")


@accounts_group.command("list")
@click.argument("client", metavar="CLIENT")
@click.option("--unmapped", is_flag=True, help="Only analytic accounts without a report category")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in AccountKind]),
    help="Only accounts of one kind",
)
@click.pass_context
def list_accounts(ctx, client: str, unmapped: bool, kind: str | None):
    """List a client's chart of accounts."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = ChartOfAccountsService(db)

    if unmapped:
        accounts = service.get_unmapped_accounts(client_id)
    else:
        accounts = service.list_accounts(client_id, kind=AccountKind(kind) if kind else None)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\n{'Code':<20} {'Name':<40} {'Kind':<10} {'Category':<30}")
    click.echo("-" * 100)
    for account in accounts:
        category = resolve(account.report_category)
        label = category.value if category is not None else (account.report_category or "-")
        indent = "  " * max(account.level - 1, 0)
        name = f"{indent}{account.name}"
        click.echo(f"{account.code:<20} {name[:40]:<40} {account.kind.value:<10} {label:<30}")


@accounts_group.command("stats")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def account_stats(ctx, client: str):
    """Show how many analytic accounts map to a report category."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    summary = ChartOfAccountsService(db).mapping_stats(client_id)

    click.echo(f"Total analytic accounts: {summary.total}")
    click.echo(f"Mapped: {summary.mapped}")
    click.echo(f"Unmapped: {summary.unmapped_count}")
    click.echo(f"Coverage: {summary.mapping_percentage:.1f}%")


def register_commands(cli):
    """Register chart of accounts commands with main CLI."""
    cli.add_command(accounts_group, name="accounts")
