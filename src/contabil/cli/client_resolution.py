"""CLI helpers for client resolution and error handling."""

from __future__ import annotations

import click
from contabil.domain.client import ClientService
from contabil.utils.client_resolver import resolve_client


def resolve_client_or_exit(
    ctx: click.Context, client_service: ClientService, client: str | int
) -> int:
    """Resolve client name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_client(client_service, client)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
