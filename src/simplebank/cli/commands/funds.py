"""Deposit and withdraw commands."""

import click

from simplebank.cli.display import format_money
from simplebank.cli.error_handling import handle_domain_error, save_or_exit
from simplebank.cli.session import login_or_exit
from simplebank.domain.errors import DomainError
from simplebank.utils.amount_parser import parse_amount


def _parse_amount_or_exit(ctx, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.command("deposit")
@click.argument("account_number", metavar="ACCOUNT")
@click.option("--amount", required=True, help="Amount to deposit (e.g., 100 or 1,250.50)")
@click.pass_context
def deposit(ctx, account_number: str, amount: str):
    """Deposit money into an account.

    Examples:
        simplebank deposit 0012345678 --amount 100
    """
    bank = ctx.obj["bank"]
    value = _parse_amount_or_exit(ctx, amount)
    account = login_or_exit(ctx, bank, account_number)

    try:
        account.deposit(value)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx, bank)
    click.echo("Deposit successful!")
    click.echo(f"Amount deposited: {format_money(value)}")
    click.echo(f"New balance: {format_money(account.balance)}")


@click.command("withdraw")
@click.argument("account_number", metavar="ACCOUNT")
@click.option("--amount", required=True, help="Amount to withdraw (e.g., 30 or 1,250.50)")
@click.pass_context
def withdraw(ctx, account_number: str, amount: str):
    """Withdraw money from an account.

    Prompts for the password to log in and for the PIN to authorize the
    withdrawal.

    Examples:
        simplebank withdraw 0012345678 --amount 30
    """
    bank = ctx.obj["bank"]
    value = _parse_amount_or_exit(ctx, amount)
    account = login_or_exit(ctx, bank, account_number)
    pin = click.prompt("Enter your 4-digit PIN", hide_input=True)

    try:
        account.withdraw(value, pin)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx, bank)
    click.echo("Withdrawal successful!")
    click.echo(f"Amount withdrawn: {format_money(value)}")
    click.echo(f"New balance: {format_money(account.balance)}")


def register_commands(cli):
    """Register deposit and withdraw commands with main CLI."""
    cli.add_command(deposit)
    cli.add_command(withdraw)
