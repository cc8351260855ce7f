"""Category management commands."""

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.domain.category import CategoryService
from pocketbook.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--usage", is_flag=True, help="Show how many transactions and budgets use each category")
@click.pass_context
def list_categories(ctx, usage: bool):
    """List all categories."""
    service = CategoryService(ctx.obj["store"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for label in categories:
        if usage:
            transaction_count, budget_count = service.category_usage(label)
            click.echo(f"  {label:<24} {transaction_count:>5} transactions  {budget_count:>2} budgets")
        else:
            click.echo(f"  {label}")


@category_group.command("add")
@click.argument("name")
@click.pass_context
def add_category(ctx, name: str):
    """Add a category."""
    service = CategoryService(ctx.obj["store"])

    try:
        label = service.add_category(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added category '{label}'")


@category_group.command("delete")
@click.argument("name")
@click.pass_context
def delete_category(ctx, name: str):
    """Delete a category no transaction or budget uses."""
    service = CategoryService(ctx.obj["store"])

    try:
        service.delete_category(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
