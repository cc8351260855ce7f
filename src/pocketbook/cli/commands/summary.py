"""Summary and analytics commands."""

from datetime import date

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.formatting import format_amount, format_percent
from pocketbook.domain.entities import PeriodGranularity, PeriodStats
from pocketbook.domain.errors import DomainError
from pocketbook.domain.summary import (
    COMPARISON_MONTHS,
    TOP_CATEGORY_LIMIT,
    TREND_WINDOWS,
    available_periods,
    budgets_by_usage,
    month_over_month,
    overall_stats,
    period_key,
    period_stats,
    top_expense_categories,
    total_balance,
    trend_series,
)


def _echo_stats(stats: PeriodStats, currency: str) -> None:
    click.echo(f"  Income:   {format_amount(stats.income, currency):>18}")
    click.echo(f"  Expenses: {format_amount(stats.expense, currency):>18}")
    click.echo(f"  Net:      {format_amount(stats.net, currency):>18}")


@click.group()
def summary_group():
    """Show balances, statistics and trends."""
    pass


@summary_group.command("overview")
@click.option("--include-transfers", is_flag=True, help="Apply transfers to account balances")
@click.pass_context
def overview(ctx, include_transfers: bool):
    """Show total balance, lifetime statistics and budget alerts."""
    state = ctx.obj["store"].state
    currency = state.currency

    click.echo(f"\nTotal balance: {format_amount(total_balance(state, include_transfers), currency)}")
    click.echo("\nAll time:")
    _echo_stats(overall_stats(state.transactions), currency)

    over = [p for p in budgets_by_usage(state) if p.over_limit]
    if over:
        click.echo("\nBudgets over limit this month:")
        for progress in over:
            click.echo(
                f"  {progress.budget.category}: {format_amount(progress.spent, currency)} "
                f"of {format_amount(progress.budget.limit, currency)}"
            )


@summary_group.command("periods")
@click.option("--yearly", is_flag=True, help="List years instead of months")
@click.pass_context
def periods(ctx, yearly: bool):
    """List the periods that have activity, most recent first."""
    state = ctx.obj["store"].state
    granularity = PeriodGranularity.YEARLY if yearly else PeriodGranularity.MONTHLY
    for key in available_periods(state.transactions, granularity):
        click.echo(key)


@summary_group.command("stats")
@click.option("--period", "period_value", help="Period key (YYYY-MM or YYYY; default: current month)")
@click.pass_context
def stats(ctx, period_value: str | None):
    """Show income, expenses and net for a period."""
    state = ctx.obj["store"].state
    key = period_value or period_key(date.today(), PeriodGranularity.MONTHLY)

    click.echo(f"\nPeriod {key}:")
    _echo_stats(period_stats(state.transactions, key), state.currency)


@summary_group.command("categories")
@click.option("--limit", type=int, default=TOP_CATEGORY_LIMIT, show_default=True, help="Number of categories to show")
@click.pass_context
def categories(ctx, limit: int):
    """Show the categories with the highest total expense."""
    state = ctx.obj["store"].state

    ranking = top_expense_categories(state.transactions, limit)
    if not ranking:
        click.echo("No expenses recorded.")
        return

    for entry in ranking:
        click.echo(f"{entry.category:<24} {format_amount(entry.total, state.currency):>18}")


@summary_group.command("trends")
@click.option("--window", type=click.Choice(list(TREND_WINDOWS)), default="1m", help="Time window (default: 1m)")
@click.pass_context
def trends(ctx, window: str):
    """Show daily income, expenses and running balance."""
    state = ctx.obj["store"].state
    currency = state.currency

    try:
        series = trend_series(state.transactions, TREND_WINDOWS[window])
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{'Date':<12} {'Income':>16} {'Expenses':>16} {'Balance':>16}")
    click.echo("-" * 63)
    for point in series:
        if point.income == 0 and point.expense == 0:
            continue
        click.echo(
            f"{point.date.isoformat():<12} "
            f"{format_amount(point.income, currency):>16} "
            f"{format_amount(point.expense, currency):>16} "
            f"{format_amount(point.balance, currency):>16}"
        )
    click.echo(f"\nBalance over window: {format_amount(series[-1].balance, currency)}")


@summary_group.command("compare")
@click.option("--months", type=int, default=COMPARISON_MONTHS, show_default=True, help="Number of active months to compare")
@click.pass_context
def compare(ctx, months: int):
    """Compare recent months against each other."""
    state = ctx.obj["store"].state
    currency = state.currency

    rows = month_over_month(state.transactions, months)
    if not rows:
        click.echo("No transactions recorded.")
        return

    click.echo(f"\n{'Month':<8} {'Income':>16} {'Change':>8} {'Expenses':>16} {'Change':>8} {'Balance':>16}")
    click.echo("-" * 77)
    for row in rows:
        click.echo(
            f"{row.month:<8} "
            f"{format_amount(row.income, currency):>16} {format_percent(row.income_change):>8} "
            f"{format_amount(row.expense, currency):>16} {format_percent(row.expense_change):>8} "
            f"{format_amount(row.balance, currency):>16}"
        )


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
