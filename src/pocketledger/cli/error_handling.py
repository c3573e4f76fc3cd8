"""CLI error handling helpers."""

from contextlib import contextmanager

import click

from pocketledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


@contextmanager
def domain_errors(ctx: click.Context):
    """Turn domain errors raised inside the block into a clean CLI exit."""
    try:
        yield
    except DomainError as e:
        handle_domain_error(ctx, e)
