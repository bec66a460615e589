"""Text rendering of accounts and transactions for the CLI."""

from decimal import Decimal
from typing import Iterable

import click

from simplebank.domain.entities import AccountSummary, Transaction

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def echo_transactions(
    account_number: str, customer_name: str, transactions: Iterable[Transaction]
) -> None:
    """Print a transaction history table, oldest first."""
    transactions = list(transactions)
    if not transactions:
        click.echo("No transactions found for this account.")
        return

    click.echo("\n" + "=" * 60)
    click.echo(f"Transaction History - Account: {account_number}")
    click.echo(f"Customer: {customer_name}")
    click.echo("=" * 60)
    click.echo(f"{'Type':<10} | {'Amount':<12} | Date & Time")
    click.echo("-" * 60)
    for txn in transactions:
        when = txn.timestamp.astimezone().strftime(TIMESTAMP_FORMAT)
        click.echo(f"{txn.kind.value:<10} | {format_money(txn.amount):<12} | {when}")
    click.echo("=" * 60)


def echo_account_details(summary: AccountSummary) -> None:
    click.echo("\n" + "=" * 60)
    click.echo(f"Account Number: {summary.account_number}")
    click.echo(f"Customer Name: {summary.customer_name}")
    click.echo(f"Balance: {format_money(summary.balance)}")
    click.echo(f"Status: {summary.status}")
    click.echo(f"Total Transactions: {summary.transaction_count}")
    click.echo("=" * 60)


def echo_account_table(summaries: list[AccountSummary]) -> None:
    if not summaries:
        click.echo("No accounts in the system.")
        return

    click.echo("\n" + "=" * 90)
    click.echo("All Accounts in the System")
    click.echo("=" * 90)
    click.echo(
        f"{'Account No':<15} | {'Customer Name':<20} | {'Balance':<14} | {'Status':<8} | Transactions"
    )
    click.echo("-" * 90)
    for s in summaries:
        click.echo(
            f"{s.account_number:<15} | {s.customer_name[:20]:<20} | "
            f"{format_money(s.balance):<14} | {s.status:<8} | {s.transaction_count}"
        )
    click.echo("=" * 90)
    click.echo(f"Total Accounts: {len(summaries)}")
