"""Transaction management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.commands.category import resolve_category
from pocketledger.cli.error_handling import domain_errors, handle_domain_error
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.entities import TransactionType
from pocketledger.domain.errors import NotFoundError, transaction_not_found
from pocketledger.domain.transaction import TransactionService
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    "date_str",
    required=True,
    help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Signed amount (e.g., -42.50 for a purchase)")
@click.option("--description", default="", help="Transaction description")
@click.option("--payee", help="Payee name (created when new)")
@click.option("--category", help="Category name or ID")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Override the inferred type")
@click.option("--transfer-to", help="Counter account for a transfer")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date_str: str,
    amount: str,
    description: str,
    payee: str | None,
    category: str | None,
    txn_type: str | None,
    transfer_to: str | None,
    notes: str | None,
):
    """Add a transaction manually.

    Without --type, a category decides income or expense; otherwise the
    sign of the amount does.

    Examples:
        pocketledger transaction add --account 1 --date today --amount -50 --category Groceries
        pocketledger transaction add --account Checking --date 2024-01-15 --amount -500 --transfer-to Savings
    """
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    account_service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    transfer_account_id = None
    if transfer_to:
        transfer_account_id = resolve_account_or_exit(ctx, account_service, transfer_to)

    with domain_errors(ctx):
        txn_date = parse_date(date_str)
        txn_amount = parse_amount(amount)
        category_id = (
            resolve_category(CategoryService(db), category) if category else None
        )
        transaction_id = TransactionService(db, settings.default_currency).create_transaction(
            account_id=account_id,
            date=txn_date,
            amount=txn_amount,
            description=description,
            type=TransactionType(txn_type.lower()) if txn_type else None,
            category_id=category_id,
            transfer_account_id=transfer_account_id,
            notes=notes,
            payee_name=payee,
        )

    txn = TransactionService(db).get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.amount:,.2f} {txn.currency}")
    click.echo(f"  Type: {txn.type.value}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if category:
        click.echo(f"  Category: {category}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="Transaction date")
@click.option("--amount", help="Signed amount")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Transaction type")
@click.option("--notes", help="Notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    date_str: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    txn_type: str | None,
    notes: str | None,
) -> None:
    """Update only the fields that are given.

    Examples:
        pocketledger transaction update 1 --amount -75.00
        pocketledger transaction update 1 --category ""
    """
    db = ctx.obj["db"]
    with domain_errors(ctx):
        category_id = None
        if category:
            category_id = resolve_category(CategoryService(db), category)
        TransactionService(db).update_transaction(
            transaction_id,
            date=parse_date(date_str) if date_str else None,
            amount=parse_amount(amount) if amount else None,
            description=description,
            type=TransactionType(txn_type.lower()) if txn_type else None,
            category_id=category_id,
            notes=notes,
            clear_category=category == "",
        )
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.option("--category", help="Category name or ID")
@click.option("--account", help="Account name or ID")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only this type")
@click.pass_context
def list_transactions(ctx, start_date, end_date, category, account, txn_type):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None
    with domain_errors(ctx):
        transactions = TransactionService(db).list_transactions(
            start_date=parse_date(start_date) if start_date else None,
            end_date=parse_date(end_date) if end_date else None,
            category_id=resolve_category(category_service, category, include_archived=True)
            if category
            else None,
            account_id=account_id,
            type=TransactionType(txn_type.lower()) if txn_type else None,
        )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}
    categories = {cat.id: cat.name for cat in category_service.list_all()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12} {'Type':<9} {'Account':<18} {'Category':<20} Description"
    )
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.amount:>12,.2f} {txn.type.value:<9} "
            f"{accounts.get(txn.account_id, 'Unknown')[:18]:<18} "
            f"{categories.get(txn.category_id, '')[:20]:<20} {(txn.description or '')[:30]}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])

    if service.get_transaction(transaction_id) is None:
        handle_domain_error(ctx, NotFoundError(transaction_not_found(transaction_id)))

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    with domain_errors(ctx):
        service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
