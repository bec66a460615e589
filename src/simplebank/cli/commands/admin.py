"""Administrator commands."""

from functools import update_wrapper

import click

from simplebank.cli.display import (
    echo_account_details,
    echo_account_table,
    echo_transactions,
    format_money,
)
from simplebank.cli.error_handling import handle_domain_error, save_or_exit
from simplebank.domain import auth
from simplebank.domain.admin import AdminService
from simplebank.domain.audit import DEFAULT_AUDIT_LIMIT
from simplebank.domain.errors import DomainError


def requires_admin(f):
    """Log in as administrator before running the command.

    The login happens after the command line has been parsed, so
    `--help` and usage errors never prompt for the password. The session
    is closed when the command finishes.
    """

    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        service = AdminService(ctx.obj["bank"], ctx.obj["audit"])

        click.echo(auth.admin_password_hint())
        password = click.prompt("Enter admin password", hide_input=True)
        if not service.login(password):
            click.echo("Error: Invalid admin password!", err=True)
            ctx.exit(1)

        ctx.obj["admin"] = service
        ctx.call_on_close(service.logout)
        return ctx.invoke(f, *args, **kwargs)

    return update_wrapper(wrapper, f)


@click.group()
def admin_group():
    """Administrator control panel.

    Every admin command asks for the administrator password first.
    """
    pass


@admin_group.command("accounts")
@requires_admin
@click.pass_context
def list_accounts(ctx):
    """List all accounts with balances and status."""
    echo_account_table(ctx.obj["admin"].list_accounts())


@admin_group.command("show")
@requires_admin
@click.argument("account_number", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account_number: str):
    """Show details of one account."""
    try:
        summary = ctx.obj["admin"].account_details(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_account_details(summary)


@admin_group.command("total")
@requires_admin
@click.pass_context
def total_balance(ctx):
    """Show the total balance held by the bank."""
    total, count = ctx.obj["admin"].total_balance()
    click.echo("\n" + "=" * 50)
    click.echo(f"Total Bank Balance: {format_money(total)}")
    click.echo(f"Total Accounts: {count}")
    click.echo("=" * 50)


@admin_group.command("history")
@requires_admin
@click.argument("account_number", metavar="ACCOUNT")
@click.pass_context
def account_history(ctx, account_number: str):
    """Show the transactions of any account."""
    admin = ctx.obj["admin"]
    try:
        summary = admin.account_details(account_number)
        transactions = admin.account_transactions(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_transactions(summary.account_number, summary.customer_name, transactions)


@admin_group.command("lock")
@requires_admin
@click.argument("account_number", metavar="ACCOUNT")
@click.pass_context
def lock_account(ctx, account_number: str):
    """Lock an account so its customer cannot log in."""
    try:
        ctx.obj["admin"].lock_account(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_or_exit(ctx, ctx.obj["bank"])
    click.echo("Account locked successfully.")


@admin_group.command("unlock")
@requires_admin
@click.argument("account_number", metavar="ACCOUNT")
@click.pass_context
def unlock_account(ctx, account_number: str):
    """Unlock a locked account."""
    try:
        ctx.obj["admin"].unlock_account(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)
    save_or_exit(ctx, ctx.obj["bank"])
    click.echo("Account unlocked successfully.")


@admin_group.command("audit")
@requires_admin
@click.option(
    "--limit",
    type=int,
    default=DEFAULT_AUDIT_LIMIT,
    show_default=True,
    help="Number of recent log entries to display",
)
@click.pass_context
def audit_logs(ctx, limit: int):
    """Show the most recent audit log entries."""
    view = ctx.obj["admin"].audit_logs(limit)
    if view.total == 0:
        click.echo("No audit logs found.")
        return

    click.echo("\n" + "=" * 80)
    click.echo(f"AUDIT LOGS (Showing last {len(view.entries)} entries)")
    click.echo("=" * 80)
    for line in view.entries:
        click.echo(line)
    click.echo("=" * 80)
    click.echo(f"Total log entries: {view.total}")


def register_commands(cli):
    """Register admin commands with main CLI."""
    cli.add_command(admin_group, name="admin")
