"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click
from pocketbook.domain.account import AccountService
from pocketbook.domain.entities import Account
from pocketbook.domain.errors import DomainError


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str
) -> Account:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return account_service.find_account(account)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
