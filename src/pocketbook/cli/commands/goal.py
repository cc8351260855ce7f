"""Savings goal commands."""

from dataclasses import replace

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.formatting import format_amount, format_percent
from pocketbook.domain.entities import GoalPriority
from pocketbook.domain.errors import DomainError
from pocketbook.domain.savings import SavingsGoalService
from pocketbook.domain.summary import goal_progress
from pocketbook.utils.amount_parser import parse_amount
from pocketbook.utils.date_parser import parse_date

PRIORITIES = [p.value for p in GoalPriority]


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.option("--target", required=True, help="Target amount")
@click.option("--by", "target_date", required=True, help="Target date (YYYY-MM-DD)")
@click.option("--current", default="0", help="Amount already saved (recorded as a contribution)")
@click.option("--priority", type=click.Choice(PRIORITIES), default="medium", help="Priority (default: medium)")
@click.option("--description", help="Goal description")
@click.pass_context
def create_goal(ctx, name: str, target: str, target_date: str, current: str, priority: str, description: str | None):
    """Create a savings goal.

    Example:
        pocketbook goal create "Holiday" --target 1500 --by 2025-07-01 --current 200
    """
    service = SavingsGoalService(ctx.obj["store"])

    try:
        target_amount = parse_amount(target)
        current_amount = parse_amount(current)
        parsed_date = parse_date(target_date)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        goal = service.create_goal(
            name=name,
            target_amount=target_amount,
            target_date=parsed_date,
            current_amount=current_amount,
            priority=GoalPriority(priority),
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created goal '{goal.name}' (ID: {goal.id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals, closest to completion first."""
    store = ctx.obj["store"]
    service = SavingsGoalService(store)

    goals = service.list_goals()
    if not goals:
        click.echo("No savings goals found.")
        return

    currency = store.state.currency
    click.echo(f"\n{'Goal':<20} {'Saved':>16} {'Target':>16} {'Progress':>9}  {'By':<10}  Priority")
    click.echo("-" * 90)
    for goal in goals:
        click.echo(
            f"{goal.name:<20} "
            f"{format_amount(goal.current_amount, currency):>16} "
            f"{format_amount(goal.target_amount, currency):>16} "
            f"{format_percent(goal_progress(goal)):>9}  "
            f"{goal.target_date.isoformat():<10}  {goal.priority.value}"
        )


@goal_group.command("contribute")
@click.argument("goal")
@click.argument("amount")
@click.pass_context
def contribute(ctx, goal: str, amount: str):
    """Put money into a goal.

    GOAL can be a goal ID or name. The amount is recorded as a
    "Savings Goal" expense on the first active account.
    """
    store = ctx.obj["store"]
    service = SavingsGoalService(store)

    try:
        existing = service.find_goal(goal)
        updated = service.contribute(existing.id, parse_amount(amount))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Goal '{updated.name}' now at {format_amount(updated.current_amount, store.state.currency)} "
        f"({format_percent(goal_progress(updated))})"
    )


@goal_group.command("update")
@click.argument("goal")
@click.option("--name", help="New name")
@click.option("--target", help="New target amount")
@click.option("--current", help="New current amount")
@click.option("--by", "target_date", help="New target date")
@click.option("--priority", type=click.Choice(PRIORITIES), help="New priority")
@click.option("--description", help="New description")
@click.pass_context
def update_goal(
    ctx,
    goal: str,
    name: str | None,
    target: str | None,
    current: str | None,
    target_date: str | None,
    priority: str | None,
    description: str | None,
):
    """Update a savings goal.

    GOAL can be a goal ID or name. Raising the current amount records a
    contribution for the difference.
    """
    service = SavingsGoalService(ctx.obj["store"])

    try:
        existing = service.find_goal(goal)
        changes = {}
        if name is not None:
            changes["name"] = name
        if target is not None:
            changes["target_amount"] = parse_amount(target)
        if current is not None:
            changes["current_amount"] = parse_amount(current)
        if target_date is not None:
            changes["target_date"] = parse_date(target_date)
        if priority is not None:
            changes["priority"] = GoalPriority(priority)
        if description is not None:
            changes["description"] = description
        updated = service.update_goal(replace(existing, **changes))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated goal '{updated.name}'")


@goal_group.command("delete")
@click.argument("goal")
@click.pass_context
def delete_goal(ctx, goal: str):
    """Delete a savings goal.

    Contributions already recorded stay in the transaction history.
    """
    service = SavingsGoalService(ctx.obj["store"])

    try:
        existing = service.find_goal(goal)
        service.delete_goal(existing.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted goal '{existing.name}'")


def register_commands(cli):
    """Register savings goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
