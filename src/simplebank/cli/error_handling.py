"""CLI error handling helpers."""

import click

from simplebank.domain.bank import Bank
from simplebank.domain.errors import DomainError, PersistenceError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def save_or_exit(ctx: click.Context, bank: Bank) -> None:
    """Persist the registry, exiting with failure if the write fails.

    The in-memory change that preceded the save is not rolled back.
    """
    try:
        bank.save()
    except PersistenceError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
