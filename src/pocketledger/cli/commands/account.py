"""Account management commands."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.error_handling import domain_errors
from pocketledger.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", default="checking", help="Account type (default: checking)")
@click.pass_context
def create_account(ctx, name: str, account_type: str):
    """Create a new account.

    Examples:
        pocketledger account create "Joint Checking"
        pocketledger account create "Visa" --type credit
    """
    service = AccountService(ctx.obj["db"])
    with domain_errors(ctx):
        account_id = service.create_account(name=name, account_type=account_type)
    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Type: {acc.account_type}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--type", "account_type", help="New account type (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, account_type: str | None) -> None:
    """Rename an account. ACCOUNT can be an account name or ID."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    with domain_errors(ctx):
        service.rename_account(account_id, new_name, account_type=account_type)
    click.echo(f"Renamed account {account_id} to '{new_name.strip()}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str) -> None:
    """Delete an account that has no transactions."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    with domain_errors(ctx):
        service.delete_account(account_id)
    click.echo(f"Deleted account {account_id}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
