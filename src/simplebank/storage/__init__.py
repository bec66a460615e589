"""Storage layer for simplebank application."""

from simplebank.storage.base import Storage
from simplebank.storage.factories import create_audit_service, create_storage

__all__ = ["Storage", "create_storage", "create_audit_service"]
