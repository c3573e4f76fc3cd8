"""Main CLI entry point."""

import logging

import click
from pocketledger.config import get_settings
from pocketledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from pocketledger.cli.commands import (
    account,
    budget,
    category,
    import_cmd,
    init_categories,
    recurring,
    summary,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar="POCKETLEDGER_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Log what the engine is doing")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """pocketledger - Personal and family budget tracking.

    Import bank exports, schedule recurring bills and compare what you
    planned against what you actually spent.
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    logging.basicConfig(
        level=logging.INFO if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
budget.register_commands(cli)
import_cmd.register_commands(cli)
transaction.register_commands(cli)
recurring.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
