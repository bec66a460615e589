"""Upgrade path for legacy accounts created before passwords and PINs."""

import enum

from simplebank.domain import auth
from simplebank.domain import errors
from simplebank.domain.account import Account


class MigrationState(str, enum.Enum):
    NEEDS_MIGRATION = "NEEDS_MIGRATION"
    VERIFYING = "VERIFYING"
    SETTING_PASSWORD = "SETTING_PASSWORD"
    SETTING_PIN = "SETTING_PIN"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


def needs_migration(account: Account) -> bool:
    """Return True if the account is missing its password digest or PIN."""
    return account.needs_migration


class AccountMigrationHelper:
    """Walks one account through setting up a password and PIN.

    The caller feeds user input step by step::

        helper = AccountMigrationHelper(account)
        helper.start()
        helper.verify_identity(entered_number)
        helper.set_password(password, confirmation)
        helper.set_pin(pin, confirmation)

    Any failed step moves the helper to CANCELLED and raises
    MigrationCancelledError, or InvalidPinFormatError for a malformed PIN.
    The account is only modified by the final successful ``set_pin`` call.
    """

    def __init__(self, account: Account):
        self.account = account
        self.state = MigrationState.NEEDS_MIGRATION
        self._password_hash: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.state is MigrationState.COMPLETE

    def start(self) -> None:
        self._expect(MigrationState.NEEDS_MIGRATION)
        self.state = MigrationState.VERIFYING

    def verify_identity(self, account_number: str) -> None:
        """Confirm the user knows the account number being migrated."""
        self._expect(MigrationState.VERIFYING)
        if account_number != self.account.account_number:
            self._cancel(errors.MigrationCancelledError("Account number mismatch"))
        self.state = MigrationState.SETTING_PASSWORD

    def set_password(self, password: str, confirmation: str) -> None:
        self._expect(MigrationState.SETTING_PASSWORD)
        if password != confirmation:
            self._cancel(errors.PasswordMismatchError("Passwords don't match"))
        self._password_hash = auth.hash_password(password)
        self.state = MigrationState.SETTING_PIN

    def set_pin(self, pin: str, confirmation: str) -> None:
        """Set the PIN and apply the new credentials to the account.

        The account is unlocked as part of a successful migration, even if
        an administrator had locked it.
        """
        self._expect(MigrationState.SETTING_PIN)
        if not auth.is_valid_pin(pin):
            self._cancel(errors.InvalidPinFormatError(errors.INVALID_PIN_FORMAT))
        if pin != confirmation:
            self._cancel(errors.MigrationCancelledError("PINs don't match"))

        self.account.set_credentials(self._password_hash, pin)
        self.account.unlock()
        self.state = MigrationState.COMPLETE

    def _expect(self, state: MigrationState) -> None:
        if self.state is not state:
            raise errors.MigrationCancelledError(
                f"Migration step out of order: expected {state.value}, "
                f"currently {self.state.value}"
            )

    def _cancel(self, error: Exception) -> None:
        self.state = MigrationState.CANCELLED
        self._password_hash = None
        raise error
