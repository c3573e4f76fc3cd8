"""Initialize default categories."""

import click
from pocketledger.domain.category import CategoryService


# (name, is_income, exclude_from_budget, exclude_from_totals)
INITIAL_CATEGORIES = [
    ("Salary", True, False, False),
    ("Other Income", True, False, False),
    ("Refunds", True, True, False),
    ("Housing", False, False, False),
    ("Groceries", False, False, False),
    ("Restaurants", False, False, False),
    ("Transportation", False, False, False),
    ("Utilities", False, False, False),
    ("Health", False, False, False),
    ("Entertainment", False, False, False),
    ("Savings", False, True, False),
    ("Credit Card Payments", False, True, True),
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with a default set of categories."""
    service = CategoryService(ctx.obj["db"])

    if service.list_active():
        click.echo("Categories already exist. Skipping initialization.")
        return

    for name, is_income, exclude_from_budget, exclude_from_totals in INITIAL_CATEGORIES:
        service.create_category(
            name=name,
            is_income=is_income,
            exclude_from_budget=exclude_from_budget,
            exclude_from_totals=exclude_from_totals,
        )
    click.echo(f"Created {len(INITIAL_CATEGORIES)} categories")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
