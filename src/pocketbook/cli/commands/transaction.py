"""Transaction management commands."""

import click
from pocketbook.cli.account_resolution import resolve_account_or_exit
from pocketbook.cli.date_filters import period_option, resolve_cli_date_range
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.formatting import format_amount
from pocketbook.domain.account import AccountService
from pocketbook.domain.entities import TransactionType
from pocketbook.domain.errors import DomainError
from pocketbook.domain.transaction import TransactionService
from pocketbook.utils.amount_parser import parse_amount
from pocketbook.utils.date_parser import parse_date

TRANSACTION_TYPES = [t.value for t in TransactionType]


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--date", "txn_date", default="today", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", required=True, help="Positive transaction amount (e.g., 123.45)")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES), default="expense", help="Transaction type (default: expense)")
@click.option("--category", default="", help="Category label (not needed for transfers)")
@click.option("--description", default="", help="Transaction description")
@click.option("--to-account", help="Destination account name or ID (transfers only)")
@click.option("--tag", "tags", multiple=True, help="Tag (may be repeated)")
@click.option("--notes", help="Notes")
@click.option("--location", help="Location")
@click.option("--recurring", is_flag=True, default=None, help="Mark as recurring")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    txn_date: str,
    amount: str,
    txn_type: str,
    category: str,
    description: str,
    to_account: str | None,
    tags: tuple[str, ...],
    notes: str | None,
    location: str | None,
    recurring: bool | None,
):
    """Add a transaction.

    Examples:
        pocketbook transaction add --account "Main Account" --amount 12.50 --category Food
        pocketbook transaction add --account 1 --amount 2000 --type income --category Salary
        pocketbook transaction add --account Checking --amount 300 --type transfer --to-account Savings
    """
    store = ctx.obj["store"]
    transaction_service = TransactionService(store)
    account_service = AccountService(store)

    account_obj = resolve_account_or_exit(ctx, account_service, account)
    to_account_id = None
    if to_account is not None:
        to_account_id = resolve_account_or_exit(ctx, account_service, to_account).id

    try:
        parsed_date = parse_date(txn_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        parsed_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = transaction_service.create_transaction(
            account_id=account_obj.id,
            date=parsed_date,
            amount=parsed_amount,
            type=TransactionType(txn_type),
            category=category,
            description=description,
            to_account_id=to_account_id,
            tags=list(tags) or None,
            notes=notes,
            location=location,
            is_recurring=recurring,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_amount(txn.amount, account_obj.currency)}")
    if txn.category:
        click.echo(f"  Category: {txn.category}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_option
@click.option("--category", help="Category label")
@click.option("--account", help="Account name or ID")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES), help="Transaction type")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    category: str | None,
    account: str | None,
    txn_type: str | None,
):
    """List transactions, newest first."""
    store = ctx.obj["store"]
    service = TransactionService(store)
    account_service = AccountService(store)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account).id

    transactions = service.list_transactions(
        account_id=account_id,
        start_date=start,
        end_date=end,
        category=category,
        type=TransactionType(txn_type) if txn_type else None,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    currency = store.state.currency
    click.echo(f"\n{'Date':<12} {'Type':<9} {'Amount':>16}  {'Category':<16} {'Account':<18} Description")
    click.echo("-" * 100)
    for txn in transactions:
        account_label = account_service.account_label(txn.account_id)
        if txn.type == TransactionType.TRANSFER and txn.to_account_id:
            account_label = f"{account_label} -> {account_service.account_label(txn.to_account_id)}"
        click.echo(
            f"{txn.date.isoformat():<12} {txn.type.value:<9} {format_amount(txn.amount, currency):>16}  "
            f"{txn.category:<16} {account_label:<18} {txn.description}"
        )
    click.echo(f"\n{len(transactions)} transaction{'s' if len(transactions) != 1 else ''}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", "txn_date", help="Transaction date")
@click.option("--amount", help="Positive transaction amount")
@click.option("--category", help="Category label")
@click.option("--description", help="Transaction description")
@click.option("--notes", help="Notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    txn_date: str | None,
    amount: str | None,
    category: str | None,
    description: str | None,
    notes: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.
    """
    service = TransactionService(ctx.obj["store"])

    changes = {}
    try:
        if txn_date is not None:
            changes["date"] = parse_date(txn_date)
        if amount is not None:
            changes["amount"] = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    if category is not None:
        changes["category"] = category
    if description is not None:
        changes["description"] = description
    if notes is not None:
        changes["notes"] = notes

    try:
        service.update_fields(transaction_id, **changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["store"])
    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
