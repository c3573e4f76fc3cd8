"""Recurring transaction commands."""

from datetime import date

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.commands.category import resolve_category
from pocketledger.cli.error_handling import domain_errors
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.entities import Frequency
from pocketledger.domain.recurring import RecurringService, cursor_of, recurring_state
from pocketledger.utils.date_parser import parse_date

FREQUENCY_CHOICE = click.Choice([f.value for f in Frequency], case_sensitive=False)


def _reference_date(value: str | None) -> date:
    return parse_date(value) if value else date.today()


@click.group()
def recurring_group():
    """Schedule repeating income and bills."""
    pass


@recurring_group.command("add")
@click.argument("description")
@click.option("--amount", required=True, help="Signed amount of each occurrence")
@click.option("--frequency", required=True, type=FREQUENCY_CHOICE)
@click.option("--start", "start_date", required=True, help="First occurrence date")
@click.option("--end", "end_date", help="Last date an occurrence may fall on")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--payee", help="Payee name (created when new)")
@click.pass_context
def add_recurring(
    ctx,
    description: str,
    amount: str,
    frequency: str,
    start_date: str,
    end_date: str | None,
    account: str,
    category: str | None,
    payee: str | None,
):
    """Create a recurring transaction.

    Examples:
        pocketledger recurring add Rent --amount -1500 --frequency monthly --start 2024-01-31 --account Checking
    """
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    with domain_errors(ctx):
        recurring_id = RecurringService(db, settings.default_currency).create_recurring(
            description=description,
            amount=amount,
            frequency=frequency.lower(),
            start_date=parse_date(start_date),
            end_date=parse_date(end_date) if end_date else None,
            account_id=account_id,
            category_id=resolve_category(CategoryService(db), category) if category else None,
            payee_name=payee,
        )
    click.echo(f"Created recurring transaction '{description.strip()}' (ID: {recurring_id})")


@recurring_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include cancelled definitions")
@click.option("--today", help="Reference date for the state column")
@click.pass_context
def list_recurring(ctx, show_all: bool, today: str | None):
    """List recurring transactions with their next occurrence."""
    service = RecurringService(ctx.obj["db"])
    with domain_errors(ctx):
        now = _reference_date(today)

    definitions = service.list_recurring(active_only=not show_all)
    if not definitions:
        click.echo("No recurring transactions found.")
        return

    click.echo(f"\n{'ID':<5} {'Description':<25} {'Amount':>12} {'Frequency':<10} {'Next':<12} State")
    click.echo("-" * 80)
    for rec in definitions:
        click.echo(
            f"{rec.id:<5} {rec.description[:25]:<25} {rec.amount:>12,.2f} "
            f"{rec.frequency.value:<10} {str(cursor_of(rec)):<12} {recurring_state(rec, now).value}"
        )


@recurring_group.command("due")
@click.option("--today", help="Reference date (defaults to today)")
@click.pass_context
def show_due(ctx, today: str | None):
    """Show occurrences that are due, without creating anything."""
    service = RecurringService(ctx.obj["db"])
    with domain_errors(ctx):
        now = _reference_date(today)

    pending = service.due(now)
    if not pending:
        click.echo("Nothing is due.")
        return

    for recurring_id, dates in pending.items():
        rec = service.get_recurring(recurring_id)
        shown = ", ".join(str(d) for d in dates)
        click.echo(f"{rec.description} (ID: {recurring_id}): {shown}")


@recurring_group.command("run")
@click.option("--today", help="Reference date (defaults to today)")
@click.option("--id", "recurring_id", type=int, help="Only this definition")
@click.pass_context
def run_due(ctx, today: str | None, recurring_id: int | None):
    """Create transactions for every due occurrence.

    Running twice for the same date creates nothing new.
    """
    service = RecurringService(ctx.obj["db"])
    with domain_errors(ctx):
        created = service.materialize_due(_reference_date(today), recurring_id=recurring_id)

    if not created:
        click.echo("No transactions created.")
        return

    click.echo(f"Created {len(created)} transaction(s):")
    for txn in created:
        click.echo(f"  {txn.date}  {txn.amount:>12,.2f}  {txn.description}")


@recurring_group.command("cancel")
@click.argument("recurring_id", type=int)
@click.pass_context
def cancel_recurring(ctx, recurring_id: int):
    """Stop a definition; created transactions are kept."""
    with domain_errors(ctx):
        RecurringService(ctx.obj["db"]).cancel(recurring_id)
    click.echo(f"Cancelled recurring transaction {recurring_id}")


@recurring_group.command("delete")
@click.argument("recurring_id", type=int)
@click.pass_context
def delete_recurring(ctx, recurring_id: int):
    """Delete a definition; created transactions are kept."""
    with domain_errors(ctx):
        RecurringService(ctx.obj["db"]).delete(recurring_id)
    click.echo(f"Deleted recurring transaction {recurring_id}")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
