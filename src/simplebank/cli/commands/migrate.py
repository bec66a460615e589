"""Legacy account migration command."""

import click

from simplebank.cli.error_handling import handle_domain_error
from simplebank.cli.session import prompt_migration
from simplebank.domain.errors import DomainError, PersistenceError


@click.command("migrate")
@click.argument("account_number", metavar="ACCOUNT")
@click.pass_context
def migrate_account(ctx, account_number: str):
    """Upgrade an old account with a password and PIN.

    Accounts created before passwords and PINs existed must be migrated
    before they can be used. Migration also clears any lock on the account.
    """
    bank = ctx.obj["bank"]

    try:
        migrated = bank.migrate_account(account_number, prompt_migration)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not migrated:
        click.echo("Account already has password and PIN set up.")
        return
    click.echo("Account migration saved successfully!")


def register_commands(cli):
    """Register migrate command with main CLI."""
    cli.add_command(migrate_account)
