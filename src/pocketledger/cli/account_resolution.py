"""CLI helper for account resolution."""

from __future__ import annotations

import click
from pocketledger.domain.account import AccountService
from pocketledger.domain.errors import DomainError
from pocketledger.cli.error_handling import handle_domain_error


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return account_service.resolve(account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
