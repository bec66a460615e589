"""Account aggregate: balance, credentials, lock flag and transaction history."""

from decimal import Decimal
from typing import Iterable, Optional

from simplebank.domain import auth
from simplebank.domain import errors
from simplebank.domain.audit import AuditService
from simplebank.domain.entities import AccountSummary, Transaction, TransactionKind


class Account:
    """A customer ledger.

    The balance only changes through ``deposit`` and ``withdraw``, and each
    change appends exactly one Transaction, so the transaction history
    always sums to the balance.
    """

    def __init__(
        self,
        account_number: str,
        customer_name: str,
        password_hash: Optional[str] = None,
        pin: Optional[str] = None,
        is_locked: bool = False,
        audit: Optional[AuditService] = None,
    ):
        """Create an empty account.

        Use ``Account.open`` for new customers and ``Account.restore`` for
        accounts read back from storage.

        Args:
            account_number: Unique account number
            customer_name: Display name of the customer
            password_hash: Password digest, None for legacy accounts
            pin: Four digit PIN, None for legacy accounts
            is_locked: Whether login is blocked
            audit: Audit sink for deposit/withdraw events
        """
        self._account_number = account_number
        self.customer_name = customer_name
        self.password_hash = password_hash
        self.pin = pin
        self._is_locked = is_locked
        self._balance = Decimal("0")
        self._transactions: list[Transaction] = []
        self._audit = audit

    @classmethod
    def open(
        cls,
        account_number: str,
        customer_name: str,
        password: str,
        pin: str,
        audit: Optional[AuditService] = None,
    ) -> "Account":
        """Open a new zero-balance account with a hashed password."""
        return cls(
            account_number=account_number,
            customer_name=customer_name,
            password_hash=auth.hash_password(password),
            pin=pin,
            audit=audit,
        )

    @classmethod
    def restore(
        cls,
        account_number: str,
        customer_name: str,
        balance: Decimal,
        transactions: Iterable[Transaction],
        password_hash: Optional[str] = None,
        pin: Optional[str] = None,
        is_locked: bool = False,
    ) -> "Account":
        """Rebuild a persisted account without emitting audit events.

        The stored balance is kept as-is; ``derived_balance`` can be used to
        cross-check it against the restored history.
        """
        account = cls(
            account_number=account_number,
            customer_name=customer_name,
            password_hash=password_hash,
            pin=pin,
            is_locked=is_locked,
        )
        account._balance = Decimal(balance)
        account._transactions = list(transactions)
        return account

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def is_locked(self) -> bool:
        return self._is_locked

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Transaction history, oldest first."""
        return tuple(self._transactions)

    @property
    def needs_migration(self) -> bool:
        """True if the account predates password and PIN protection."""
        return not self.password_hash or not self.pin

    def attach_audit(self, audit: Optional[AuditService]) -> None:
        self._audit = audit

    def deposit(self, amount: Decimal) -> Transaction:
        """Add funds to the account.

        Locked accounts still accept deposits; the lock only gates login.

        Args:
            amount: Amount to deposit

        Returns:
            The recorded DEPOSIT transaction

        Raises:
            InvalidAmountError: If amount is not positive
        """
        if amount <= 0:
            raise errors.InvalidAmountError(errors.invalid_amount("Deposit"))

        transaction = Transaction(kind=TransactionKind.DEPOSIT, amount=amount)
        self._balance += amount
        self._transactions.append(transaction)
        if self._audit is not None:
            self._audit.deposit_success(self._account_number, amount)
        return transaction

    def withdraw(self, amount: Decimal, pin: Optional[str]) -> Transaction:
        """Take funds out of the account after checking the PIN.

        The PIN is checked before anything else, so a wrong PIN is reported
        regardless of the amount.

        Args:
            amount: Amount to withdraw
            pin: PIN supplied by the customer

        Returns:
            The recorded WITHDRAW transaction

        Raises:
            InvalidPinError: If the PIN does not match
            InvalidAmountError: If amount is not positive
            InsufficientBalanceError: If amount exceeds the balance
        """
        if not auth.verify_pin(pin, self.pin):
            if self._audit is not None:
                self._audit.wrong_pin(self._account_number)
            raise errors.InvalidPinError(errors.INVALID_PIN)

        if amount <= 0:
            if self._audit is not None:
                self._audit.withdraw_failure(self._account_number, "Amount <= 0")
            raise errors.InvalidAmountError(errors.invalid_amount("Withdrawal"))

        if amount > self._balance:
            if self._audit is not None:
                self._audit.withdraw_failure(self._account_number, "Insufficient balance")
            raise errors.InsufficientBalanceError(errors.insufficient_balance(self._balance))

        transaction = Transaction(kind=TransactionKind.WITHDRAW, amount=amount)
        self._balance -= amount
        self._transactions.append(transaction)
        if self._audit is not None:
            self._audit.withdraw_success(self._account_number, amount)
        return transaction

    def lock(self) -> None:
        self._is_locked = True

    def unlock(self) -> None:
        self._is_locked = False

    def set_credentials(self, password_hash: str, pin: str) -> None:
        """Replace the password digest and PIN."""
        self.password_hash = password_hash
        self.pin = pin

    def derived_balance(self) -> Decimal:
        """Balance recomputed from the transaction history."""
        return sum((t.signed_amount for t in self._transactions), Decimal("0"))

    def summary(self) -> AccountSummary:
        return AccountSummary(
            account_number=self._account_number,
            customer_name=self.customer_name,
            balance=self._balance,
            is_locked=self._is_locked,
            transaction_count=len(self._transactions),
        )

    def __repr__(self) -> str:
        return (
            f"Account[{self._account_number}] - {self.customer_name} - "
            f"Balance: ${self._balance:.2f} - Transactions: {len(self._transactions)}"
        )
