"""Backup export and import commands."""

from pathlib import Path

import click
from pocketbook.domain.backup import BackupService, backup_filename


@click.command("export")
@click.argument("file", type=click.Path(dir_okay=False), required=False)
@click.option("--stdout", "to_stdout", is_flag=True, help="Write the backup to standard output")
@click.pass_context
def export_data(ctx, file: str | None, to_stdout: bool):
    """Export all data as a JSON backup.

    FILE defaults to pocketbook-backup-YYYY-MM-DD.json in the current
    directory.
    """
    service = BackupService(ctx.obj["store"])
    content = service.export_data()

    if to_stdout:
        click.echo(content)
        return

    path = Path(file or backup_filename())
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        click.echo(f"Error: Could not write backup: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported backup to {path}")


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def import_data(ctx, file: str, yes: bool):
    """Replace all data with the contents of a JSON backup.

    The backup is validated first; an invalid file leaves existing data
    untouched.
    """
    service = BackupService(ctx.obj["store"])

    if not yes and not click.confirm("This replaces all existing data. Continue?"):
        click.echo("Import cancelled.")
        return

    text = Path(file).read_text(encoding="utf-8")
    if not service.import_data(text):
        click.echo("Error: Invalid backup format. No data was changed.", err=True)
        ctx.exit(1)

    state = ctx.obj["store"].state
    click.echo(
        f"Imported {len(state.transactions)} transactions, "
        f"{len(state.accounts)} accounts, {len(state.savings_goals)} goals "
        f"and {len(state.budgets)} budgets"
    )


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(export_data)
    cli.add_command(import_data)
