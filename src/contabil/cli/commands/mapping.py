"""Category mapping commands."""

import click
from contabil.cli.client_resolution import resolve_client_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.cli.commands.movements import STATEMENT_CHOICES
from contabil.domain.client import ClientService
from contabil.domain.mapping import MappingService


@click.group()
def mapping_group():
    """Map account codes to report categories."""
    pass


@mapping_group.command("set")
@click.argument("client", metavar="CLIENT")
@click.argument("account_code", metavar="ACCOUNT_CODE")
@click.argument("category", metavar="CATEGORY")
@click.option("--name", "account_name", help="Account name to store (defaults to the chart entry's name)")
@click.pass_context
def set_mapping(ctx, client: str, account_code: str, category: str, account_name: str | None):
    """Map an account code to a canonical category.

    CATEGORY must be an exact canonical name; see 'contabil categories list'.

    Examples:
        contabil mapping set "Padaria Central" 04.1.01.04.0013 "Despesas Administrativas"
    """
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    service = MappingService(db)

    try:
        service.upsert_mapping(client_id, account_code, category, account_name=account_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Mapped {account_code.strip()} to '{category.strip()}'")


@mapping_group.command("remove")
@click.argument("client", metavar="CLIENT")
@click.argument("account_code", metavar="ACCOUNT_CODE")
@click.pass_context
def remove_mapping(ctx, client: str, account_code: str):
    """Remove the mapping of an account code."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    if MappingService(db).delete_mapping(client_id, account_code):
        click.echo(f"Removed mapping of {account_code.strip()}")
    else:
        click.echo(f"Error: No mapping found for {account_code.strip()}", err=True)
        ctx.exit(1)


@mapping_group.command("list")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def list_mappings(ctx, client: str):
    """List a client's saved mappings."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    mappings = MappingService(db).list_mappings(client_id)
    if not mappings:
        click.echo("No mappings found.")
        return

    click.echo(f"\n{'Code':<20} {'Name':<40} {'Category':<35}")
    click.echo("-" * 97)
    for m in mappings:
        click.echo(f"{m.account_code:<20} {m.account_name[:40]:<40} {m.category:<35}")


@mapping_group.command("unmapped")
@click.argument("client", metavar="CLIENT")
@click.option("--year", type=int, help="Check the ledger rows of this year instead of the chart")
@click.option(
    "--type",
    "statement_type",
    type=click.Choice(STATEMENT_CHOICES, case_sensitive=False),
    default="income",
    show_default=True,
    help="Statement to check (with --year)",
)
@click.pass_context
def unmapped(ctx, client: str, year: int | None, statement_type: str):
    """Show rows that feed no statement line."""
    db = ctx.obj["db"]
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    try:
        summary = MappingService(db).get_unmapped_summary(
            client_id, year=year, statement_type=statement_type if year is not None else None
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Mapped {summary.mapped} of {summary.total} ({summary.mapping_percentage:.1f}%), "
        f"{summary.unmapped_count} unmapped"
    )
    for row in summary.unmapped:
        click.echo(f"  {row.code:<20} {row.name}")


def register_commands(cli):
    """Register mapping commands with main CLI."""
    cli.add_command(mapping_group, name="mapping")
