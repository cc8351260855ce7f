"""CLI helpers for date range resolution."""

from datetime import date

import click

from pocketbook.utils.date_parser import PERIODS, get_date_range, parse_date

PERIOD_CHOICES = list(PERIODS)

period_option = click.option(
    "--period",
    type=click.Choice(PERIOD_CHOICES, case_sensitive=False),
    help="Named period (cannot be combined with --start-date/--end-date)",
)


def _parse_or_exit(ctx: click.Context, value: str, label: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve a CLI date range from a named period or explicit dates."""
    if period is not None:
        if start_date or end_date:
            click.echo(
                "Error: --period cannot be combined with --start-date or --end-date.",
                err=True,
            )
            ctx.exit(1)
        return get_date_range(period)

    start = _parse_or_exit(ctx, start_date, "start date") if start_date else None
    end = _parse_or_exit(ctx, end_date, "end date") if end_date else None

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
