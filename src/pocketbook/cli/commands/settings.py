"""Preference commands."""

import click
from pocketbook.domain import actions
from pocketbook.domain.entities import Theme

THEMES = [t.value for t in Theme]


@click.group()
def settings_group():
    """View and change preferences."""
    pass


@settings_group.command("show")
@click.pass_context
def show(ctx):
    """Show current preferences."""
    state = ctx.obj["store"].state
    click.echo(f"Theme: {state.theme.value}")
    click.echo(f"Currency: {state.currency}")


@settings_group.command("theme")
@click.argument("theme", type=click.Choice(THEMES))
@click.pass_context
def set_theme(ctx, theme: str):
    """Set the display theme."""
    ctx.obj["store"].dispatch(actions.set_theme(Theme(theme)))
    click.echo(f"Theme set to {theme}")


@settings_group.command("currency")
@click.argument("code")
@click.pass_context
def set_currency(ctx, code: str):
    """Set the global currency code (e.g. EUR, USD, COP)."""
    code = code.strip().upper()
    if not code:
        click.echo("Error: Currency code is required", err=True)
        ctx.exit(1)
    ctx.obj["store"].dispatch(actions.set_currency(code))
    click.echo(f"Currency set to {code}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
