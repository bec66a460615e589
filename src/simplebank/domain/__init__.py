"""Domain layer for simplebank application."""

from simplebank.domain.account import Account
from simplebank.domain.audit import AuditService
from simplebank.domain.bank import Bank
from simplebank.domain.migration import AccountMigrationHelper, MigrationState
from simplebank.domain.admin import AdminService

__all__ = [
    "Account",
    "AuditService",
    "Bank",
    "AccountMigrationHelper",
    "MigrationState",
    "AdminService",
]
