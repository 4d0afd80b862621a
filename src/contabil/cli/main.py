"""Main CLI entry point."""

import click
from contabil.config.logging import configure_logging
from contabil.config.settings import DB_PATH_ENV, LOG_LEVEL_ENV, LOG_LEVELS
from contabil.database.factories import create_sqlite_database

# Import and register all commands at module level
from contabil.cli.commands import (
    accounts,
    categories,
    client,
    mapping,
    movements,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar=LOG_LEVEL_ENV,
    help="Log verbosity (logs go to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Contabil - Financial statements from Brazilian ledger exports.

    Import a client's chart of accounts and monthly ledger balances, map
    accounts to report categories and produce the Income Statement (DRE)
    and the Balance Sheet.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level.upper())

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
accounts.register_commands(cli)
movements.register_commands(cli)
mapping.register_commands(cli)
categories.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
