"""Abstract storage interface."""

from abc import ABC, abstractmethod
from typing import Mapping

from simplebank.domain.account import Account


class Storage(ABC):
    """Loads and saves the complete account registry as one snapshot."""

    @abstractmethod
    def load(self) -> dict[str, Account]:
        """Load all accounts keyed by account number.

        A missing store yields an empty registry.

        Raises:
            PersistenceError: If the store exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    def save(self, accounts: Mapping[str, Account]) -> None:
        """Replace the stored snapshot with the given accounts.

        Raises:
            PersistenceError: If the snapshot cannot be written
        """
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a snapshot has been written before."""
        pass
