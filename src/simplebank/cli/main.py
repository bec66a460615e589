"""Main CLI entry point."""

import logging

import click

from simplebank.domain.bank import Bank
from simplebank.domain.errors import PersistenceError
from simplebank.storage.factories import create_audit_service, create_storage

# Import and register all commands at module level
from simplebank.cli.commands import (
    account,
    admin,
    funds,
    migrate,
    view,
)


@click.group()
@click.option(
    "--data-path",
    type=click.Path(dir_okay=False),
    help="Path to account data file (overrides SIMPLEBANK_DATA_PATH environment variable). "
    "Use a .db suffix for SQLite storage.",
    envvar="SIMPLEBANK_DATA_PATH",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    help="Path to audit log file (overrides SIMPLEBANK_AUDIT_LOG environment variable)",
    envvar="SIMPLEBANK_AUDIT_LOG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, data_path: str | None, audit_log: str | None, verbose: bool):
    """SimpleBank - Command-line banking simulator.

    Create accounts, deposit and withdraw money, and review transaction
    history. Administrators can inspect and lock accounts and read the
    audit log.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Load accounts only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        audit = create_audit_service(log_path=audit_log)
        try:
            storage = create_storage(data_path=data_path)
        except PersistenceError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        bank = Bank(storage, audit)
        bank.load()
        ctx.obj["audit"] = audit
        ctx.obj["bank"] = bank


# Register all commands
account.register_commands(cli)
funds.register_commands(cli)
view.register_commands(cli)
migrate.register_commands(cli)
admin.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
