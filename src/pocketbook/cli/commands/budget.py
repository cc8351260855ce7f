"""Budget management commands."""

from dataclasses import replace

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.formatting import format_amount, format_percent
from pocketbook.domain.budget import BudgetService
from pocketbook.domain.entities import BudgetPeriod
from pocketbook.domain.errors import DomainError
from pocketbook.utils.amount_parser import parse_amount

BUDGET_PERIODS = [p.value for p in BudgetPeriod]


@click.group()
def budget_group():
    """Manage category budgets."""
    pass


@budget_group.command("create")
@click.argument("category")
@click.argument("limit")
@click.option("--period", type=click.Choice(BUDGET_PERIODS), default="monthly", help="Budget period (default: monthly)")
@click.pass_context
def create_budget(ctx, category: str, limit: str, period: str):
    """Create a budget for a category.

    Example:
        pocketbook budget create Food 400
    """
    service = BudgetService(ctx.obj["store"])

    try:
        parsed_limit = parse_amount(limit)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        budget = service.create_budget(category, parsed_limit, BudgetPeriod(period))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {budget.period.value} budget for '{budget.category}' (ID: {budget.id})")


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """Show this month's spending against every budget, most used first."""
    store = ctx.obj["store"]
    service = BudgetService(store)

    report = service.progress_report()
    if not report:
        click.echo("No budgets found.")
        return

    currency = store.state.currency
    click.echo(f"\n{'Category':<20} {'Spent':>16} {'Limit':>16} {'Remaining':>16} {'Used':>7}")
    click.echo("-" * 80)
    for progress in report:
        flag = "  OVER" if progress.over_limit else ""
        click.echo(
            f"{progress.budget.category:<20} "
            f"{format_amount(progress.spent, currency):>16} "
            f"{format_amount(progress.budget.limit, currency):>16} "
            f"{format_amount(progress.remaining, currency):>16} "
            f"{format_percent(progress.percent):>7}{flag}"
        )


@budget_group.command("update")
@click.argument("budget")
@click.option("--limit", help="New limit")
@click.option("--period", type=click.Choice(BUDGET_PERIODS), help="New period")
@click.option("--category", help="New category")
@click.pass_context
def update_budget(ctx, budget: str, limit: str | None, period: str | None, category: str | None):
    """Update a budget.

    BUDGET can be a budget ID or its category.
    """
    service = BudgetService(ctx.obj["store"])

    try:
        existing = service.find_budget(budget)
        changes = {}
        if limit is not None:
            changes["limit"] = parse_amount(limit)
        if period is not None:
            changes["period"] = BudgetPeriod(period)
        if category is not None:
            changes["category"] = category
        updated = service.update_budget(replace(existing, **changes))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated budget for '{updated.category}'")


@budget_group.command("delete")
@click.argument("budget")
@click.pass_context
def delete_budget(ctx, budget: str):
    """Delete a budget.

    BUDGET can be a budget ID or its category.
    """
    service = BudgetService(ctx.obj["store"])

    try:
        existing = service.find_budget(budget)
        service.delete_budget(existing.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted budget for '{existing.category}'")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
