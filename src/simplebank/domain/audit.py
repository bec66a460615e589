"""Append-only audit log for security and money relevant events."""

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from simplebank.domain.entities import AuditLogView
from simplebank.domain.errors import AuditWriteError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_AUDIT_LIMIT = 50

STATUS_SUCCESS = "SUCCESS"
STATUS_FAILED = "FAILED"

# Every character str.splitlines() treats as a line boundary
_LINE_BREAK_CHARS = "\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029"
_LINE_BREAKS = str.maketrans(
    {c: c.encode("unicode_escape").decode("ascii") for c in _LINE_BREAK_CHARS}
)


def _one_line(value: object) -> str:
    return str(value).translate(_LINE_BREAKS)


class AuditService:
    """Writes one line per event to a text log and reads it back.

    Lines look like::

        [2024-01-15 10:30:00] ACTION=WITHDRAW account=0012345678 status=SUCCESS details=Amount=$30.00

    A failed write is logged and otherwise ignored, so auditing never
    blocks or reverses the operation that triggered it.
    """

    def __init__(self, log_path: str | Path, clock: Callable[[], datetime] = datetime.now):
        """Initialize audit service.

        Args:
            log_path: Path to the audit log file. Its directory is created
                on first write if it does not exist.
            clock: Source of timestamps for new entries
        """
        self.log_path = Path(log_path)
        self._clock = clock

    def record(
        self,
        action: str,
        status: str,
        *,
        account: Optional[str] = None,
        admin: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        """Append an event to the log.

        Line breaks inside field values are escaped so each event occupies
        exactly one line.
        """
        parts = [f"ACTION={_one_line(action)}"]
        if account is not None:
            parts.append(f"account={_one_line(account)}")
        if admin is not None:
            parts.append(f"admin={_one_line(admin)}")
        parts.append(f"status={_one_line(status)}")
        if details:
            parts.append(f"details={_one_line(details)}")

        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        line = f"[{timestamp}] {' '.join(parts)}"
        try:
            self._append(line)
        except AuditWriteError as e:
            logger.error("Failed to write audit log: %s", e)

    def _append(self, line: str) -> None:
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            raise AuditWriteError(f"{self.log_path}: {e}") from e

    # Customer events
    def login_success(self, account_number: str) -> None:
        self.record("LOGIN", STATUS_SUCCESS, account=account_number)

    def login_failure(self, account_number: str, reason: str) -> None:
        self.record("LOGIN", STATUS_FAILED, account=account_number, details=reason)

    def wrong_password(self, account_number: str) -> None:
        self.record(
            "WRONG_PASSWORD",
            STATUS_FAILED,
            account=account_number,
            details="Invalid password attempt",
        )

    def wrong_pin(self, account_number: str) -> None:
        self.record(
            "WRONG_PIN", STATUS_FAILED, account=account_number, details="Invalid PIN attempt"
        )

    def deposit_success(self, account_number: str, amount: Decimal) -> None:
        self.record(
            "DEPOSIT", STATUS_SUCCESS, account=account_number, details=f"Amount=${amount:.2f}"
        )

    def withdraw_success(self, account_number: str, amount: Decimal) -> None:
        self.record(
            "WITHDRAW", STATUS_SUCCESS, account=account_number, details=f"Amount=${amount:.2f}"
        )

    def withdraw_failure(self, account_number: str, reason: str) -> None:
        self.record("WITHDRAW", STATUS_FAILED, account=account_number, details=reason)

    def account_created(self, account_number: str) -> None:
        self.record("ACCOUNT_CREATE", STATUS_SUCCESS, account=account_number)

    def migration_completed(self, account_number: str) -> None:
        self.record(
            "MIGRATION",
            STATUS_SUCCESS,
            account=account_number,
            details="Password and PIN set up",
        )

    # Admin events
    def account_locked(self, account_number: str, admin_user: str) -> None:
        self.record(
            "ACCOUNT_LOCK",
            STATUS_SUCCESS,
            account=account_number,
            details=f"Locked by admin={admin_user}",
        )

    def account_unlocked(self, account_number: str, admin_user: str) -> None:
        self.record(
            "ACCOUNT_UNLOCK",
            STATUS_SUCCESS,
            account=account_number,
            details=f"Unlocked by admin={admin_user}",
        )

    def admin_login(self, admin_user: str) -> None:
        self.record("ADMIN_LOGIN", STATUS_SUCCESS, admin=admin_user)

    def admin_login_failure(self, reason: str) -> None:
        self.record("ADMIN_LOGIN", STATUS_FAILED, details=reason)

    def admin_logout(self, admin_user: str) -> None:
        self.record("ADMIN_LOGOUT", STATUS_SUCCESS, admin=admin_user)

    def read_entries(self) -> list[str]:
        """Read all log lines, oldest first.

        Returns:
            List of raw log lines; empty if the log does not exist or
            cannot be read
        """
        if not self.log_path.exists():
            return []
        try:
            with self.log_path.open(encoding="utf-8") as f:
                return [line.rstrip("\n") for line in f]
        except OSError as e:
            logger.error("Error reading audit logs: %s", e)
            return []

    def recent(self, limit: int = DEFAULT_AUDIT_LIMIT) -> AuditLogView:
        """Return the last ``limit`` entries in chronological order.

        Args:
            limit: Maximum number of entries to return

        Returns:
            AuditLogView with the requested window and the total entry count
        """
        entries = self.read_entries()
        window = entries[-limit:] if limit > 0 else []
        return AuditLogView(entries=tuple(window), total=len(entries))
