"""Bank: the account registry and the operations that span it."""

from __future__ import annotations

import logging
import random
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

from simplebank.domain import auth
from simplebank.domain import errors
from simplebank.domain.account import Account
from simplebank.domain.audit import AuditService
from simplebank.domain.entities import AccountSummary, Transaction
from simplebank.domain.migration import AccountMigrationHelper

if TYPE_CHECKING:
    from simplebank.storage.base import Storage

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_WIDTH = 10

MigrationRunner = Callable[[AccountMigrationHelper], None]


class Bank:
    """In-memory registry of accounts keyed by account number.

    Persistence is delegated to a Storage backend; callers decide when to
    ``save`` after mutating operations.
    """

    def __init__(
        self,
        storage: Storage,
        audit: AuditService,
        rng: Optional[random.Random] = None,
    ):
        """Initialize bank.

        Args:
            storage: Storage backend for the account registry
            audit: Audit service shared with every account
            rng: Random source for generated account numbers
        """
        self.storage = storage
        self.audit = audit
        self._rng = rng or random.Random()
        self._accounts: dict[str, Account] = {}

    def load(self) -> None:
        """Replace the registry with the stored snapshot.

        Unreadable data is logged and leaves the bank empty.
        """
        try:
            accounts = self.storage.load()
        except errors.PersistenceError as e:
            logger.error("Could not load account data, starting empty: %s", e)
            accounts = {}

        for number, account in accounts.items():
            account.attach_audit(self.audit)
            if account.balance != account.derived_balance():
                logger.warning(
                    "Account %s balance %s does not match its transactions (%s)",
                    number,
                    account.balance,
                    account.derived_balance(),
                )
        self._accounts = accounts
        logger.debug("Loaded %d account(s)", len(accounts))

    def save(self) -> None:
        """Write the registry to storage.

        Raises:
            PersistenceError: If the snapshot cannot be written. In-memory
                state is kept as-is.
        """
        self.storage.save(self._accounts)

    def create_account(
        self,
        customer_name: str,
        password: str,
        pin: str,
        account_number: Optional[str] = None,
    ) -> Account:
        """Open a new account with a zero balance.

        Args:
            customer_name: Customer display name
            password: Plaintext password, stored as a digest
            pin: Four digit PIN
            account_number: Requested account number; generated if blank

        Returns:
            The registered account

        Raises:
            InvalidAccountNumberError: If the requested number contains
                whitespace or control characters
            DuplicateAccountNumberError: If the requested number is taken
            InvalidPinFormatError: If the PIN is not four digits
        """
        if account_number is None or not account_number.strip():
            account_number = self._generate_account_number()
        else:
            account_number = account_number.strip()
            if any(c.isspace() or not c.isprintable() for c in account_number):
                raise errors.InvalidAccountNumberError(
                    errors.invalid_account_number(account_number)
                )
            if account_number in self._accounts:
                raise errors.DuplicateAccountNumberError(
                    errors.duplicate_account_number(account_number)
                )

        if not auth.is_valid_pin(pin):
            raise errors.InvalidPinFormatError(errors.INVALID_PIN_FORMAT)

        account = Account.open(
            account_number=account_number,
            customer_name=customer_name,
            password=password,
            pin=pin,
            audit=self.audit,
        )
        self._accounts[account_number] = account
        self.audit.account_created(account_number)
        return account

    def _generate_account_number(self) -> str:
        while True:
            number = f"{self._rng.randrange(10**ACCOUNT_NUMBER_WIDTH):0{ACCOUNT_NUMBER_WIDTH}d}"
            if number not in self._accounts:
                return number

    def get_account(self, account_number: str) -> Optional[Account]:
        return self._accounts.get(account_number)

    def require_account(self, account_number: str) -> Account:
        """Get an account or raise AccountNotFoundError."""
        account = self._accounts.get(account_number)
        if account is None:
            raise errors.AccountNotFoundError(errors.account_not_found(account_number))
        return account

    def account_exists(self, account_number: str) -> bool:
        return account_number in self._accounts

    def total_accounts(self) -> int:
        return len(self._accounts)

    def deposit(self, account_number: str, amount: Decimal) -> Transaction:
        return self.require_account(account_number).deposit(amount)

    def withdraw(self, account_number: str, amount: Decimal, pin: str) -> Transaction:
        return self.require_account(account_number).withdraw(amount, pin)

    def authenticate_user(self, account_number: str, password: str) -> Account:
        """Log a customer in.

        A locked account is rejected before its password is checked.

        Returns:
            The authenticated account

        Raises:
            AccountNotFoundError: If no such account exists
            AccountLockedError: If the account is locked
            AuthenticationError: If the password is wrong
        """
        account = self._accounts.get(account_number)
        if account is None:
            self.audit.login_failure(account_number, "Account not found")
            raise errors.AccountNotFoundError(errors.account_not_found(account_number))

        if account.is_locked:
            self.audit.login_failure(account_number, "Account locked")
            raise errors.AccountLockedError(errors.account_locked(account_number))

        if not auth.verify_password(password, account.password_hash):
            self.audit.wrong_password(account_number)
            raise errors.AuthenticationError(errors.INVALID_PASSWORD)

        self.audit.login_success(account_number)
        return account

    def authenticate_user_with_migration(
        self,
        account_number: str,
        read_password: Callable[[], str],
        run_migration: MigrationRunner,
    ) -> Optional[Account]:
        """Log a customer in, upgrading legacy accounts first.

        If the account has no password or PIN yet, ``run_migration`` is
        called with a migration helper instead of asking for the password.
        A completed migration is saved and None is returned; the customer
        has to log in again with the new credentials.

        Args:
            account_number: Account to log into
            read_password: Called to obtain the password once it is needed
            run_migration: Drives an AccountMigrationHelper with user input

        Returns:
            The authenticated account, or None after a migration

        Raises:
            AccountNotFoundError: If no such account exists
            MigrationCancelledError: If the migration was not completed
            AccountLockedError: If the account is locked
            AuthenticationError: If the password is wrong
        """
        account = self.require_account(account_number)

        if account.needs_migration:
            self._run_migration(account, run_migration)
            return None

        return self.authenticate_user(account_number, read_password())

    def migrate_account(self, account_number: str, run_migration: MigrationRunner) -> bool:
        """Stand-alone migration of a legacy account.

        Returns:
            True if the account was migrated, False if it already had
            credentials

        Raises:
            AccountNotFoundError: If no such account exists
            MigrationCancelledError: If the migration was not completed
        """
        account = self.require_account(account_number)
        if not account.needs_migration:
            return False
        self._run_migration(account, run_migration)
        return True

    def _run_migration(self, account: Account, run_migration: MigrationRunner) -> None:
        helper = AccountMigrationHelper(account)
        helper.start()
        run_migration(helper)
        if not helper.is_complete:
            raise errors.MigrationCancelledError("Migration was not completed")
        self.save()
        self.audit.migration_completed(account.account_number)

    def lock_account(self, account_number: str) -> bool:
        account = self._accounts.get(account_number)
        if account is None:
            return False
        account.lock()
        return True

    def unlock_account(self, account_number: str) -> bool:
        account = self._accounts.get(account_number)
        if account is None:
            return False
        account.unlock()
        return True

    def get_total_bank_balance(self) -> Decimal:
        return sum((a.balance for a in self._accounts.values()), Decimal("0"))

    def list_accounts(self) -> list[AccountSummary]:
        """Summaries of all accounts, ordered by account number."""
        return [self._accounts[n].summary() for n in sorted(self._accounts)]

    def account_details(self, account_number: str) -> AccountSummary:
        return self.require_account(account_number).summary()

    def get_transactions(self, account_number: str) -> tuple[Transaction, ...]:
        return self.require_account(account_number).transactions
