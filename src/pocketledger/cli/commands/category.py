"""Category management commands."""

import click
from pocketledger.cli.error_handling import domain_errors
from pocketledger.domain.category import CategoryService
from pocketledger.domain.errors import NotFoundError, category_name_not_found


def resolve_category(service: CategoryService, value: str, include_archived: bool = False) -> int:
    """Resolve a category name or ID to a category ID."""
    text = value.strip()
    if text.isdigit():
        return service.require_category(int(text)).id
    category = service.find_active_by_name(text)
    if category is None and include_archived:
        key = text.lower()
        category = next(
            (c for c in service.list_archived() if c.name.strip().lower() == key), None
        )
    if category is None:
        raise NotFoundError(category_name_not_found(text))
    return category.id


def _flags(category) -> str:
    flags = ["income" if category.is_income else "expense"]
    if category.exclude_from_budget:
        flags.append("no-budget")
    if category.exclude_from_totals:
        flags.append("no-totals")
    return ", ".join(flags)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--archived", is_flag=True, help="Show archived categories instead")
@click.pass_context
def list_categories(ctx, archived: bool):
    """List categories in display order."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_archived() if archived else service.list_active()
    if not categories:
        if archived:
            click.echo("No archived categories.")
        else:
            click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nArchived categories:" if archived else "\nCategories:")
    for cat in categories:
        line = f"{cat.name} (ID: {cat.id}) [{_flags(cat)}]"
        if cat.archived_on is not None:
            line += f" archived {cat.archived_on:%Y-%m-%d}"
        click.echo(f"  {line}")


@category_group.command("create")
@click.argument("name")
@click.option("--income", is_flag=True, help="Category classifies income")
@click.option("--exclude-from-budget", is_flag=True, help="Track actuals without a budget target")
@click.option("--exclude-from-totals", is_flag=True, help="Leave out of totals entirely")
@click.option("--description", help="Optional description")
@click.pass_context
def create_category(
    ctx,
    name: str,
    income: bool,
    exclude_from_budget: bool,
    exclude_from_totals: bool,
    description: str | None,
):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    with domain_errors(ctx):
        category_id = service.create_category(
            name=name,
            is_income=income,
            exclude_from_budget=exclude_from_budget,
            exclude_from_totals=exclude_from_totals,
            description=description,
        )
    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--income/--expense", "is_income", default=None, help="Change income flag")
@click.option("--exclude-from-budget/--include-in-budget", default=None)
@click.option("--exclude-from-totals/--include-in-totals", default=None)
@click.pass_context
def update_category(ctx, category: str, name, is_income, exclude_from_budget, exclude_from_totals):
    """Rename a category or change its flags."""
    service = CategoryService(ctx.obj["db"])
    with domain_errors(ctx):
        category_id = resolve_category(service, category)
        service.update_category(
            category_id,
            name=name,
            is_income=is_income,
            exclude_from_budget=exclude_from_budget,
            exclude_from_totals=exclude_from_totals,
        )
    click.echo(f"Updated category {category_id}")


@category_group.command("archive")
@click.argument("category")
@click.pass_context
def archive_category(ctx, category: str):
    """Archive a category; its history stays intact."""
    service = CategoryService(ctx.obj["db"])
    with domain_errors(ctx):
        category_id = resolve_category(service, category)
        service.archive(category_id, True)
    click.echo(f"Archived category {category_id}")


@category_group.command("restore")
@click.argument("category")
@click.pass_context
def restore_category(ctx, category: str):
    """Bring an archived category back."""
    service = CategoryService(ctx.obj["db"])
    with domain_errors(ctx):
        category_id = resolve_category(service, category, include_archived=True)
        service.archive(category_id, False)
    click.echo(f"Restored category {category_id}")


@category_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category no transaction uses."""
    service = CategoryService(ctx.obj["db"])
    with domain_errors(ctx):
        category_id = resolve_category(service, category, include_archived=True)
        service.delete(category_id)
    click.echo(f"Deleted category {category_id}")


@category_group.command("reorder")
@click.argument("category_ids", nargs=-1, type=int, required=True)
@click.pass_context
def reorder_categories(ctx, category_ids: tuple[int, ...]):
    """Set the display order by listing every active category ID."""
    service = CategoryService(ctx.obj["db"])
    with domain_errors(ctx):
        service.reorder(category_ids)
    click.echo("Category order updated")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
