"""Canonical category commands."""

import click
from contabil.domain.catalog import CanonicalCategory, StatementType, categories_for
from contabil.domain.resolver import aliases_of, resolve


@click.group()
def categories_group():
    """Inspect the canonical report categories."""
    pass


@categories_group.command("list")
@click.option(
    "--type",
    "statement_type",
    type=click.Choice(["income", "balance"]),
    help="Only categories of one statement",
)
@click.option("--aliases", is_flag=True, help="Show the labels that resolve to each category")
def list_categories(statement_type: str | None, aliases: bool):
    """List canonical category names, the only names a mapping accepts."""
    if statement_type is None:
        categories = list(CanonicalCategory)
    else:
        categories = categories_for(StatementType(statement_type))

    for category in categories:
        group = f" [{category.balance_group.value}]" if category.balance_group is not None else ""
        click.echo(f"{category.value:<40} {category.polarity.value:<9}{group}")
        if aliases:
            for alias in aliases_of(category):
                click.echo(f"    {alias}")


@categories_group.command("resolve")
@click.argument("label")
def resolve_label(label: str):
    """Show which canonical category a raw label resolves to."""
    category = resolve(label)
    if category is None:
        click.echo("Unmapped")
        return
    click.echo(category.value)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(categories_group, name="categories")
