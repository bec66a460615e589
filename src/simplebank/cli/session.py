"""CLI helpers for customer login and account migration prompts."""

from __future__ import annotations

import click

from simplebank.domain.account import Account
from simplebank.domain.bank import Bank
from simplebank.domain.errors import DomainError, PersistenceError
from simplebank.domain.migration import AccountMigrationHelper


def prompt_migration(helper: AccountMigrationHelper) -> None:
    """Drive a migration with interactive prompts.

    Any mismatch raises MigrationCancelledError from the helper.
    """
    account = helper.account
    click.echo("\n" + "=" * 60)
    click.echo("ACCOUNT MIGRATION REQUIRED")
    click.echo("=" * 60)
    click.echo("Your account needs to be upgraded with security features.")
    click.echo(f"Account: {account.account_number}")
    click.echo(f"Customer: {account.customer_name}")
    click.echo("=" * 60)

    helper.verify_identity(click.prompt("Enter your account number to confirm"))

    password = click.prompt("Create a new password", hide_input=True)
    confirmation = click.prompt("Confirm password", hide_input=True)
    helper.set_password(password, confirmation)

    pin = click.prompt("Create a 4-digit PIN", hide_input=True)
    pin_confirmation = click.prompt("Confirm PIN", hide_input=True)
    helper.set_pin(pin, pin_confirmation)

    click.echo("\nAccount migration successful!")
    click.echo("Your account has been upgraded with password and PIN protection.")


def login_or_exit(ctx: click.Context, bank: Bank, account_number: str) -> Account:
    """Log a customer in, or exit with a CLI error.

    Legacy accounts are migrated first; the command then stops and the
    customer has to run it again with the new credentials.
    """
    try:
        account = bank.authenticate_user_with_migration(
            account_number,
            read_password=lambda: click.prompt("Enter password", hide_input=True),
            run_migration=prompt_migration,
        )
    except (DomainError, PersistenceError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if account is None:
        click.echo("You can now login with your new credentials. Please run the command again.")
        ctx.exit(1)

    click.echo(f"Welcome, {account.customer_name}!")
    return account
