"""Balance and transaction history commands."""

import click

from simplebank.cli.date_filters import resolve_cli_date_range
from simplebank.cli.display import echo_transactions, format_money
from simplebank.cli.session import login_or_exit
from simplebank.utils.date_parser import PERIODS


@click.command("balance")
@click.argument("account_number", metavar="ACCOUNT")
@click.pass_context
def check_balance(ctx, account_number: str):
    """Show the current balance of an account."""
    bank = ctx.obj["bank"]
    account = login_or_exit(ctx, bank, account_number)

    click.echo("\n" + "=" * 50)
    click.echo(f"Account Number: {account.account_number}")
    click.echo(f"Customer Name: {account.customer_name}")
    click.echo(f"Current Balance: {format_money(account.balance)}")
    click.echo(f"Total Transactions: {len(account.transactions)}")
    click.echo("=" * 50)


@click.command("history")
@click.argument("account_number", metavar="ACCOUNT")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of explicit dates")
@click.pass_context
def view_history(
    ctx, account_number: str, start_date: str | None, end_date: str | None, period: str | None
):
    """View the transaction history of an account.

    Examples:
        simplebank history 0012345678
        simplebank history 0012345678 --period this-month
        simplebank history 0012345678 --start-date 2024-01-01 --end-date 2024-01-31
    """
    bank = ctx.obj["bank"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    account = login_or_exit(ctx, bank, account_number)

    transactions = [
        t
        for t in account.transactions
        if (start is None or t.timestamp.astimezone().date() >= start)
        and (end is None or t.timestamp.astimezone().date() <= end)
    ]
    echo_transactions(account.account_number, account.customer_name, transactions)


def register_commands(cli):
    """Register view commands with main CLI."""
    cli.add_command(check_balance)
    cli.add_command(view_history)
