"""Client management commands."""

import click
from contabil.cli.client_resolution import resolve_client_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.client import ClientService


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.pass_context
def create_client(ctx, name: str):
    """Create a new client.

    Examples:
        contabil client create "Padaria Central Ltda"
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_id = service.create_client(name=name)
        click.echo(f"Created client '{name.strip()}' (ID: {client_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    db = ctx.obj["db"]
    service = ClientService(db)

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 60)
    for c in clients:
        click.echo(f"ID: {c.id:3d} | {c.name:30s} | Since: {c.created_at:%Y-%m-%d}")


@client_group.command("rename")
@click.argument("client", metavar="CLIENT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_client(ctx, client: str, new_name: str) -> None:
    """Rename a client.

    CLIENT can be a client name or ID.

    Examples:
        contabil client rename "Padaria Central" "Padaria Central Ltda"
        contabil client rename 1 "Mercado Bom Preço"
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    try:
        service.rename_client(client_id=client_id, name=new_name)
        click.echo(f"Renamed client to '{new_name.strip()}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--force", is_flag=True, help="Also delete the client's chart of accounts, movements and mappings")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client: str, force: bool, yes: bool) -> None:
    """Delete a client.

    CLIENT can be a client name or ID.

    Without --force, a client can only be deleted when it has no chart of
    accounts and no imported movements.

    Examples:
        contabil client delete "Padaria Central"
        contabil client delete 1 --force --yes
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)
    client_obj = service.get_client(client_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete client '{client_obj.name}' (ID: {client_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id, force=force)
        click.echo(f"Deleted client '{client_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
