"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidAmountError(ValidationError):
    """Deposit or withdrawal amount is not positive."""


class InvalidPinFormatError(ValidationError):
    """PIN is not exactly four decimal digits."""


class InvalidAccountNumberError(ValidationError):
    """Requested account number contains whitespace or control characters."""


class AuthenticationError(DomainError):
    """Supplied credentials did not verify."""


class InvalidPinError(AuthenticationError):
    """Supplied PIN does not match the account PIN."""


class AccountLockedError(AuthenticationError):
    """Account is locked and cannot be logged into."""


class UnauthorizedError(DomainError):
    """Administrative operation attempted without an admin session."""


class InsufficientBalanceError(DomainError):
    """Withdrawal exceeds the available balance."""


class AccountNotFoundError(NotFoundError):
    """No account is registered under the given number."""


class DuplicateAccountNumberError(ConflictError):
    """Account number is already registered."""


class MigrationCancelledError(DomainError):
    """Account migration was aborted before completion."""


class PasswordMismatchError(MigrationCancelledError):
    """Password and its confirmation differ."""


class PersistenceError(RuntimeError):
    """Account data could not be read from or written to storage."""


class AuditWriteError(OSError):
    """Audit log entry could not be appended."""


def account_not_found(account_number: str) -> str:
    """Return message for missing account."""
    return f"Account not found: {account_number}"


def account_locked(account_number: str) -> str:
    """Return message for a locked account."""
    return f"Account {account_number} is locked. Please contact admin."


def duplicate_account_number(account_number: str) -> str:
    """Return message for an account number that is already taken."""
    return (
        f"Account number '{account_number}' already exists. "
        "Please choose a different number."
    )


def insufficient_balance(balance: Decimal) -> str:
    """Return message for a withdrawal larger than the balance."""
    return f"Insufficient balance. Current balance: ${balance:,.2f}"


def invalid_account_number(account_number: str) -> str:
    """Return message for an account number that cannot be used."""
    return f"Invalid account number {account_number!r}: no spaces or control characters allowed"


def invalid_amount(operation: str) -> str:
    """Return message for a non-positive amount."""
    return f"{operation} amount must be greater than 0"


INVALID_PIN = "Invalid PIN"
INVALID_PIN_FORMAT = "PIN must be exactly 4 digits"
INVALID_PASSWORD = "Invalid password"
ADMIN_LOGIN_REQUIRED = "Unauthorized access. Please login as admin first."
