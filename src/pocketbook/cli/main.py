"""Main CLI entry point."""

import asyncio

import click

from pocketbook.database.factories import create_sqlite_storage
from pocketbook.database.persistence import PersistenceAdapter, hydrate
from pocketbook.domain.store import AppStore
from pocketbook.utils.logging_setup import configure_logging

# Import and register all commands at module level
from pocketbook.cli.commands import (
    account,
    transaction,
    category,
    budget,
    goal,
    summary,
    data,
    settings,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETBOOK_DB_PATH environment variable)",
    envvar="POCKETBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="POCKETBOOK_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Pocketbook - Personal finance tracker.

    Record income, expenses and transfers across accounts, track savings
    goals and category budgets. All data is kept in a local database.
    """
    ctx.ensure_object(dict)

    # Load state only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    configure_logging(log_level)
    adapter = PersistenceAdapter(create_sqlite_storage(database_path=db_path))
    store = AppStore()
    asyncio.run(hydrate(store, adapter))
    loaded_version = store.version

    ctx.obj["adapter"] = adapter
    ctx.obj["store"] = store

    def persist() -> None:
        async def finish() -> None:
            if store.version != loaded_version:
                await adapter.save(store.state)
            await adapter.close()

        asyncio.run(finish())

    ctx.call_on_close(persist)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
category.register_commands(cli)
budget.register_commands(cli)
goal.register_commands(cli)
summary.register_commands(cli)
data.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
