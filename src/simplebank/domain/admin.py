"""Administrator domain service."""

from decimal import Decimal

from simplebank.domain import auth
from simplebank.domain import errors
from simplebank.domain.audit import DEFAULT_AUDIT_LIMIT, AuditService
from simplebank.domain.bank import Bank
from simplebank.domain.entities import AccountSummary, AuditLogView, Transaction

ADMIN_USER = "ADMIN"


class AdminService:
    """Service for administrator inspection and account locking."""

    def __init__(self, bank: Bank, audit: AuditService):
        """Initialize admin service.

        Args:
            bank: Bank whose accounts are administered
            audit: Audit service for admin events and log review
        """
        self.bank = bank
        self.audit = audit
        self._logged_in = False

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in

    def login(self, password: str) -> bool:
        """Start an admin session.

        Returns:
            True if the password matched the administrator credential
        """
        if auth.authenticate_admin(password):
            self._logged_in = True
            self.audit.admin_login(ADMIN_USER)
            return True
        self.audit.admin_login_failure("Invalid password")
        return False

    def logout(self) -> None:
        if self._logged_in:
            self.audit.admin_logout(ADMIN_USER)
            self._logged_in = False

    def _require_login(self) -> None:
        if not self._logged_in:
            raise errors.UnauthorizedError(errors.ADMIN_LOGIN_REQUIRED)

    def list_accounts(self) -> list[AccountSummary]:
        self._require_login()
        return self.bank.list_accounts()

    def account_details(self, account_number: str) -> AccountSummary:
        self._require_login()
        return self.bank.account_details(account_number)

    def total_balance(self) -> tuple[Decimal, int]:
        """Return the total of all balances and the number of accounts."""
        self._require_login()
        return self.bank.get_total_bank_balance(), self.bank.total_accounts()

    def account_transactions(self, account_number: str) -> tuple[Transaction, ...]:
        self._require_login()
        return self.bank.get_transactions(account_number)

    def lock_account(self, account_number: str) -> None:
        """Lock an account so its customer can no longer log in.

        Raises:
            UnauthorizedError: If no admin is logged in
            AccountNotFoundError: If the account does not exist
        """
        self._require_login()
        if not self.bank.lock_account(account_number):
            raise errors.AccountNotFoundError(errors.account_not_found(account_number))
        self.audit.account_locked(account_number, ADMIN_USER)

    def unlock_account(self, account_number: str) -> None:
        """Unlock a previously locked account.

        Raises:
            UnauthorizedError: If no admin is logged in
            AccountNotFoundError: If the account does not exist
        """
        self._require_login()
        if not self.bank.unlock_account(account_number):
            raise errors.AccountNotFoundError(errors.account_not_found(account_number))
        self.audit.account_unlocked(account_number, ADMIN_USER)

    def audit_logs(self, limit: int = DEFAULT_AUDIT_LIMIT) -> AuditLogView:
        """Return the most recent audit entries; non-positive limits mean the default."""
        self._require_login()
        if limit <= 0:
            limit = DEFAULT_AUDIT_LIMIT
        return self.audit.recent(limit)
