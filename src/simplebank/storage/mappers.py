"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the account aggregate does not
depend on the table layout.
"""

from datetime import UTC

from simplebank.domain.account import Account
from simplebank.domain.entities import Transaction, TransactionKind
from simplebank.storage.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    timestamp = orm_transaction.timestamp
    # SQLite drops the timezone; timestamps are written in UTC
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return Transaction(
        kind=TransactionKind(orm_transaction.kind),
        amount=orm_transaction.amount,
        timestamp=timestamp,
    )


def account_to_domain(orm_account: ORMAccount) -> Account:
    """Convert SQLAlchemy Account model to a domain Account."""
    return Account.restore(
        account_number=orm_account.account_number,
        customer_name=orm_account.customer_name,
        balance=orm_account.balance,
        transactions=[transaction_to_domain(t) for t in orm_account.transactions],
        password_hash=orm_account.password_hash,
        pin=orm_account.pin,
        is_locked=orm_account.is_locked,
    )


def account_to_orm(account: Account) -> ORMAccount:
    """Convert a domain Account to a SQLAlchemy Account with its transactions."""
    return ORMAccount(
        account_number=account.account_number,
        customer_name=account.customer_name,
        balance=account.balance,
        password_hash=account.password_hash,
        pin=account.pin,
        is_locked=account.is_locked,
        transactions=[
            ORMTransaction(
                position=position,
                kind=t.kind.value,
                amount=t.amount,
                timestamp=t.timestamp.astimezone(UTC).replace(tzinfo=None),
            )
            for position, t in enumerate(account.transactions)
        ],
    )
