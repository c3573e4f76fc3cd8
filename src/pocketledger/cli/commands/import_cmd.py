"""CSV import command."""

import click
from pocketledger.cli.account_resolution import resolve_account_or_exit
from pocketledger.cli.error_handling import domain_errors
from pocketledger.domain.account import AccountService
from pocketledger.domain.bulk_import import BulkImportService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.errors import MappingError
from pocketledger.domain.import_mapper import ImportSession
from pocketledger.utils.csv_reader import read_csv_table


def _parse_assignment(value: str) -> tuple[str, str]:
    header, sep, role = value.rpartition("=")
    if not sep or not header.strip():
        raise MappingError(f"Invalid mapping '{value}'. Use HEADER=ROLE")
    return header.strip(), role.strip()


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--map",
    "assignments",
    multiple=True,
    required=True,
    help="Column assignment HEADER=ROLE (role: date, payee, amount, category, ignore)",
)
@click.option("--dry-run", is_flag=True, help="Show what would be imported without saving")
@click.pass_context
def import_csv(ctx, csv_file: str, account: str, assignments: tuple[str, ...], dry_run: bool):
    """Import transactions from a CSV file with any column layout.

    Examples:
        pocketledger import export.csv --account Checking \\
            --map Date=date --map Description=payee --map Amount=amount
    """
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    with domain_errors(ctx):
        headers, rows = read_csv_table(csv_file)
        session = ImportSession(
            headers=headers,
            rows=rows,
            category_type_lookup=CategoryService(db).category_type_lookup(),
        )
        for value in assignments:
            session.assign(*_parse_assignment(value))
        result = session.run()

    click.echo(f"\nMapped {len(rows)} row(s):")
    click.echo(f"  Accepted: {len(result.accepted)}")
    click.echo(f"  Rejected: {len(result.rejected)}")
    for rejected in result.rejected:
        click.echo(f"    Row {rejected.row_index + 1}: {rejected.reason}", err=True)

    if dry_run:
        click.echo("\nDry run - nothing saved:")
        for row in result.accepted:
            category = row.category or "-"
            click.echo(
                f"  {row.date:<12} {row.payee:<30} {row.amount:>12}  {row.type.value:<8} {category}"
            )
        return

    with domain_errors(ctx):
        summary = BulkImportService(db, settings.default_currency).import_rows(
            account_id, result.accepted
        )

    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {summary['imported']} transactions")
    if summary["errors"]:
        click.echo(f"  Errors: {len(summary['errors'])}")
        for error in summary["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
