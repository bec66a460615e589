"""Account management commands."""

import click

from simplebank.cli.error_handling import handle_domain_error, save_or_exit
from simplebank.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="CUSTOMER_NAME")
@click.option("--number", help="Custom account number (auto-generated if not provided)")
@click.pass_context
def create_account(ctx, name: str, number: str | None):
    """Create a new account.

    Prompts for a password and a 4-digit PIN. The account starts with a
    balance of $0.00.

    Examples:
        simplebank account create "Alice"
        simplebank account create "Bob" --number 1000000001
    """
    bank = ctx.obj["bank"]

    password = click.prompt("Create password", hide_input=True)
    pin = click.prompt("Create 4-digit PIN", hide_input=True)

    try:
        account = bank.create_account(
            customer_name=name, password=password, pin=pin, account_number=number
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx, bank)

    click.echo("\nAccount created successfully!")
    click.echo(f"Account Number: {account.account_number}")
    click.echo(f"Customer Name: {account.customer_name}")
    click.echo("Initial Balance: $0.00")
    click.echo("Keep your password and PIN safe!")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
