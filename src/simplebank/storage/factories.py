"""Factory functions for creating storage and audit log instances."""

import os
from pathlib import Path
from typing import Optional

from simplebank.domain.audit import AuditService
from simplebank.storage.base import Storage
from simplebank.storage.json_store import JsonFileStorage
from simplebank.storage.sqlalchemy_store import SQLAlchemyStorage

DEFAULT_DATA_PATH = Path("data") / "bank_data.json"
DEFAULT_AUDIT_LOG_PATH = Path("logs") / "audit.log"

SQLITE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


def create_storage(data_path: Optional[str] = None) -> Storage:
    """Create the storage backend for account data.

    Args:
        data_path: Path to the data file. If None, checks SIMPLEBANK_DATA_PATH
            environment variable, then defaults to data/bank_data.json in the
            working directory. Paths ending in .db, .sqlite or .sqlite3 use
            SQLite, anything else uses JSON.

    Returns:
        Storage instance for the resolved path
    """
    if data_path is None:
        # Check environment variable
        data_path = os.environ.get("SIMPLEBANK_DATA_PATH")

    path = Path(data_path) if data_path is not None else DEFAULT_DATA_PATH

    if path.suffix.lower() in SQLITE_SUFFIXES:
        path.parent.mkdir(parents=True, exist_ok=True)
        return SQLAlchemyStorage(f"sqlite:///{path}")
    return JsonFileStorage(path)


def create_audit_service(log_path: Optional[str] = None) -> AuditService:
    """Create the audit service.

    Args:
        log_path: Path to the audit log. If None, checks SIMPLEBANK_AUDIT_LOG
            environment variable, then defaults to logs/audit.log in the
            working directory.

    Returns:
        AuditService writing to the resolved path
    """
    if log_path is None:
        log_path = os.environ.get("SIMPLEBANK_AUDIT_LOG")

    return AuditService(Path(log_path) if log_path is not None else DEFAULT_AUDIT_LOG_PATH)
