"""Account management commands."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.formatting import format_amount
from pocketbook.domain.account import AccountService
from pocketbook.domain.entities import AccountType
from pocketbook.domain.errors import DomainError
from pocketbook.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), default="checking", help="Account type (default: checking)")
@click.option("--initial-balance", default="0", help="Balance before any recorded transaction")
@click.option("--currency", help="Currency code (defaults to the global currency)")
@click.option("--color", help="Display color (e.g. '#6366f1')")
@click.pass_context
def create_account(ctx, name: str, account_type: str, initial_balance: str, currency: str | None, color: str | None):
    """Create a new account.

    Examples:
        pocketbook account create "Wallet" --type cash
        pocketbook account create "Savings" --type savings --initial-balance 1500
    """
    service = AccountService(ctx.obj["store"])

    try:
        balance = parse_amount(initial_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        account = service.create_account(
            name=name,
            type=AccountType(account_type),
            initial_balance=balance,
            currency=currency,
            color=color,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide deactivated accounts")
@click.option("--include-transfers", is_flag=True, help="Apply transfers to source and destination balances")
@click.pass_context
def list_accounts(ctx, active_only: bool, include_transfers: bool):
    """List accounts with their current balances."""
    service = AccountService(ctx.obj["store"])

    accounts = service.list_accounts(active_only=active_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        balance = service.get_balance(acc.id, include_transfers=include_transfers)
        status = "" if acc.is_active else " (inactive)"
        click.echo(
            f"ID: {acc.id} | {acc.name + status:24s} | {acc.type.value:10s} | "
            f"{format_amount(balance, acc.currency)}"
        )


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--include-transfers", is_flag=True, help="Apply transfers to source and destination balances")
@click.pass_context
def show_balance(ctx, account: str, include_transfers: bool) -> None:
    """Show the current balance of an account.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["store"])
    account_obj = resolve_account_or_exit(ctx, service, account)
    balance = service.get_balance(account_obj.id, include_transfers=include_transfers)
    click.echo(f"{account_obj.name}: {format_amount(balance, account_obj.currency)}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["store"])
    account_obj = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(account_obj.id, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name}'")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str) -> None:
    """Mark an account as inactive, keeping its history."""
    service = AccountService(ctx.obj["store"])
    account_obj = resolve_account_or_exit(ctx, service, account)
    service.deactivate_account(account_obj.id)
    click.echo(f"Deactivated account '{account_obj.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. Transactions of the account are
    kept and will show as belonging to a deleted account.
    """
    store = ctx.obj["store"]
    service = AccountService(store)
    account_obj = resolve_account_or_exit(ctx, service, account)

    linked = sum(1 for t in store.state.transactions if t.account_id == account_obj.id)
    if linked and not yes:
        click.echo(f"Account '{account_obj.name}' has {linked} transaction{'s' if linked != 1 else ''}.")

    if not yes and not click.confirm(f"Are you sure you want to delete account '{account_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
