"""JSON file storage for the account registry."""

import json
import logging
import os
import tempfile
from datetime import UTC
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping

from dateutil import parser as date_parser

from simplebank.domain.account import Account
from simplebank.domain.entities import Transaction, TransactionKind
from simplebank.domain.errors import PersistenceError
from simplebank.storage.base import Storage

logger = logging.getLogger(__name__)


def transaction_to_record(transaction: Transaction) -> dict[str, Any]:
    return {
        "type": transaction.kind.value,
        "amount": str(transaction.amount),
        "dateTime": transaction.timestamp.isoformat(),
    }


def transaction_from_record(record: Mapping[str, Any]) -> Transaction:
    timestamp = date_parser.isoparse(record["dateTime"])
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return Transaction(
        kind=TransactionKind(record["type"]),
        amount=Decimal(str(record["amount"])),
        timestamp=timestamp,
    )


def account_to_record(account: Account) -> dict[str, Any]:
    """Convert an account to the JSON document layout.

    Field names follow the layout of existing bank data files.
    """
    return {
        "accountNumber": account.account_number,
        "customerName": account.customer_name,
        "balance": str(account.balance),
        "transactions": [transaction_to_record(t) for t in account.transactions],
        "passwordHash": account.password_hash,
        "pin": account.pin,
        "isLocked": account.is_locked,
    }


def account_from_record(account_number: str, record: Mapping[str, Any]) -> Account:
    """Rebuild an account from its JSON document.

    Records written before passwords and PINs existed simply lack those
    fields; they load with None credentials and need migration.
    """
    is_locked = record.get("isLocked", False)
    if not isinstance(is_locked, bool):
        raise ValueError(f"isLocked must be true or false, got {is_locked!r}")

    return Account.restore(
        account_number=record.get("accountNumber", account_number),
        customer_name=record["customerName"],
        balance=Decimal(str(record.get("balance", "0"))),
        transactions=[transaction_from_record(t) for t in record.get("transactions") or []],
        password_hash=record.get("passwordHash"),
        pin=record.get("pin"),
        is_locked=is_locked,
    )


class JsonFileStorage(Storage):
    """Stores the whole registry as one pretty-printed JSON document.

    Saves go to a temporary file in the same directory which then replaces
    the data file, so a crash mid-save leaves the previous snapshot intact.
    """

    def __init__(self, path: str | Path):
        """Initialize JSON storage.

        Args:
            path: Path to the JSON data file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> dict[str, Account]:
        """Load all accounts from the data file."""
        if not self.path.exists():
            logger.info("No existing data file found at %s. Starting fresh.", self.path)
            return {}

        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise PersistenceError(f"Error reading data file {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Error parsing data file {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PersistenceError(f"Error parsing data file {self.path}: expected an object")

        accounts = {}
        try:
            for number, record in data.items():
                account = account_from_record(number, record)
                if account.account_number != number:
                    raise ValueError(
                        f"key '{number}' does not match account number "
                        f"'{account.account_number}'"
                    )
                accounts[number] = account
        except (KeyError, TypeError, ValueError, AttributeError, InvalidOperation) as e:
            raise PersistenceError(f"Error parsing data file {self.path}: {e}") from e

        logger.info("Data loaded successfully. %d account(s) found.", len(accounts))
        return accounts

    def save(self, accounts: Mapping[str, Account]) -> None:
        """Atomically replace the data file with the given accounts."""
        payload = {number: account_to_record(a) for number, a in accounts.items()}
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                json.dump(payload, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceError(f"Error saving data to {self.path}: {e}") from e

        logger.debug("Data saved successfully to %s", self.path)
