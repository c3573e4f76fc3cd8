"""Budget commands."""

import click
from pocketledger.cli.commands.category import resolve_category
from pocketledger.cli.error_handling import domain_errors
from pocketledger.domain.budget import BudgetService
from pocketledger.domain.category import CategoryService


@click.group()
def budget_group():
    """Plan amounts per category."""
    pass


@budget_group.command("set")
@click.argument("category")
@click.argument("amount")
@click.pass_context
def set_budget(ctx, category: str, amount: str):
    """Set the planned amount for CATEGORY (name or ID)."""
    db = ctx.obj["db"]
    with domain_errors(ctx):
        category_id = resolve_category(CategoryService(db), category)
        stored = BudgetService(db).set(category_id, amount)
    click.echo(f"Budget for category {category_id} set to {stored:,.2f}")


@budget_group.command("clear")
@click.argument("category")
@click.pass_context
def clear_budget(ctx, category: str):
    """Remove the planned amount for CATEGORY."""
    db = ctx.obj["db"]
    with domain_errors(ctx):
        category_id = resolve_category(CategoryService(db), category)
    BudgetService(db).clear(category_id)
    click.echo(f"Budget for category {category_id} cleared")


@budget_group.command("show")
@click.pass_context
def show_budgets(ctx):
    """Show planned amounts for active categories."""
    db = ctx.obj["db"]
    budgets = BudgetService(db).snapshot()
    categories = CategoryService(db).list_active()
    if not categories:
        click.echo("No categories found.")
        return

    for cat in categories:
        planned = budgets.get(cat.id)
        shown = "-" if planned is None else f"{planned:,.2f}"
        note = " (excluded from budget)" if cat.exclude_from_budget else ""
        click.echo(f"{cat.name:<30} {shown:>12}{note}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
