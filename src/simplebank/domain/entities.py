"""Domain model entities for simplebank.

These are pure data classes representing business concepts, independent of
the storage format. Accounts are the only mutable aggregate and live in
``simplebank.domain.account``; everything here is frozen.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime, UTC
from decimal import Decimal


class TransactionKind(str, enum.Enum):
    """Direction of a balance change."""

    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


@dataclass(frozen=True)
class Transaction:
    """A single balance change recorded on an account."""

    kind: TransactionKind
    amount: Decimal
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign of its effect on the balance."""
        if self.kind is TransactionKind.WITHDRAW:
            return -self.amount
        return self.amount


@dataclass(frozen=True)
class AccountSummary:
    """Read-only projection of an account for listings and detail views."""

    account_number: str
    customer_name: str
    balance: Decimal
    is_locked: bool
    transaction_count: int

    @property
    def status(self) -> str:
        return "LOCKED" if self.is_locked else "ACTIVE"


@dataclass(frozen=True)
class AuditLogView:
    """Window of recent audit log lines."""

    entries: tuple[str, ...]
    total: int
