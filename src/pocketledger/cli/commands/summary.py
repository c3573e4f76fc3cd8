"""Budget-vs-actual summary command."""

import click
from pocketledger.cli.error_handling import domain_errors
from pocketledger.domain.aggregation import AggregationService
from pocketledger.domain.entities import TransactionType
from pocketledger.utils.date_parser import PERIOD_NAMES, parse_months, resolve_period


def _format_money(value) -> str:
    return f"{value:,.2f}"


@click.command("summary")
@click.option(
    "--type",
    "report_type",
    type=click.Choice([TransactionType.INCOME.value, TransactionType.EXPENSE.value]),
    default=TransactionType.EXPENSE.value,
    show_default=True,
    help="Which side of the budget to report",
)
@click.option("--month", "months", multiple=True, help="Month as YYYY-MM (repeatable)")
@click.option(
    "--period",
    type=click.Choice(PERIOD_NAMES, case_sensitive=False),
    help="Named period (defaults to this-month)",
)
@click.option("--totals/--no-totals", default=True, help="Show income, expenses and savings rate")
@click.pass_context
def summary(ctx, report_type: str, months: tuple[str, ...], period: str | None, totals: bool):
    """Compare planned against actual amounts per category.

    Examples:
        pocketledger summary --month 2024-01
        pocketledger summary --type income --period this-year
        pocketledger summary --month 2024-01 --month 2024-02
    """
    if months and period:
        click.echo("Error: Use either --month or --period, not both", err=True)
        ctx.exit(1)

    service = AggregationService(ctx.obj["db"])
    with domain_errors(ctx):
        selected = parse_months(list(months)) if months else resolve_period(period or "this-month")
        rows = service.budget_report(selected, report_type)
        period_totals = service.totals(selected)

    label = ", ".join(str(m) for m in selected.months())
    click.echo(f"\n{report_type.capitalize()} summary for {label}")
    click.echo("=" * 80)
    click.echo(f"{'Category':<40} {'Planned':>12} {'Actual':>12} {'Variance':>12}")
    click.echo("-" * 80)
    for row in rows:
        click.echo(
            f"{row.category_name[:40]:<40} {_format_money(row.planned):>12} "
            f"{_format_money(row.actual):>12} {_format_money(row.variance):>12}"
        )

    if rows:
        click.echo("-" * 80)
        click.echo(
            f"{'TOTAL':<40} {_format_money(sum(r.planned for r in rows)):>12} "
            f"{_format_money(sum(r.actual for r in rows)):>12} "
            f"{_format_money(sum(r.variance for r in rows)):>12}"
        )

    if totals:
        click.echo()
        click.echo(f"Income:       {_format_money(period_totals.income):>14}")
        click.echo(f"Expenses:     {_format_money(period_totals.expenses):>14}")
        click.echo(f"Net income:   {_format_money(period_totals.net_income):>14}")
        click.echo(f"Savings rate: {period_totals.savings_rate * 100:>13.1f}%")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
