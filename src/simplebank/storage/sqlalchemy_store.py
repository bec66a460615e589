"""SQLAlchemy snapshot storage for the account registry."""

import logging
from typing import Mapping

from sqlalchemy.exc import SQLAlchemyError

from simplebank.domain.account import Account
from simplebank.domain.errors import PersistenceError
from simplebank.storage.base import Storage
from simplebank.storage.mappers import account_to_domain, account_to_orm
from simplebank.storage.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    create_session_factory,
)

logger = logging.getLogger(__name__)


class SQLAlchemyStorage(Storage):
    """SQLAlchemy-based implementation of the Storage interface.

    Every save deletes and rewrites all rows inside a single transaction,
    mirroring the snapshot semantics of the JSON store.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not open database {database_url}: {e}") from e

    def exists(self) -> bool:
        # Schema is created by create_session_factory, so look for rows
        try:
            with self.session_factory() as session:
                return session.query(ORMAccount).first() is not None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Error reading database {self.database_url}: {e}") from e

    def load(self) -> dict[str, Account]:
        """Load all accounts with their transaction histories."""
        try:
            with self.session_factory() as session:
                rows = session.query(ORMAccount).order_by(ORMAccount.account_number).all()
                accounts = {row.account_number: account_to_domain(row) for row in rows}
        except SQLAlchemyError as e:
            raise PersistenceError(f"Error reading database {self.database_url}: {e}") from e

        logger.info("Data loaded successfully. %d account(s) found.", len(accounts))
        return accounts

    def save(self, accounts: Mapping[str, Account]) -> None:
        """Replace every stored account with the given registry."""
        try:
            with self.session_factory.begin() as session:
                session.query(ORMTransaction).delete()
                session.query(ORMAccount).delete()
                session.add_all(account_to_orm(a) for a in accounts.values())
        except SQLAlchemyError as e:
            raise PersistenceError(f"Error saving data to {self.database_url}: {e}") from e

        logger.debug("Data saved successfully to %s", self.database_url)
