"""Shared pytest fixtures for simplebank tests."""

import json
import random

import pytest

from simplebank.domain.admin import AdminService
from simplebank.domain.audit import AuditService
from simplebank.domain.bank import Bank
from simplebank.storage.json_store import JsonFileStorage


@pytest.fixture
def data_path(tmp_path):
    """Path of a not yet existing JSON data file."""
    return tmp_path / "data" / "bank_data.json"


@pytest.fixture
def audit_path(tmp_path):
    """Path of a not yet existing audit log."""
    return tmp_path / "logs" / "audit.log"


@pytest.fixture
def audit(audit_path):
    """Create an AuditService writing to a temporary log."""
    return AuditService(audit_path)


@pytest.fixture
def storage(data_path):
    """Create JSON storage backed by a temporary file."""
    return JsonFileStorage(data_path)


@pytest.fixture
def bank(storage, audit):
    """Create an empty Bank with a seeded account number generator."""
    return Bank(storage, audit, rng=random.Random(42))


@pytest.fixture
def alice(bank):
    """Create the sample account used throughout the tests."""
    return bank.create_account(
        customer_name="Alice", password="p1", pin="1234", account_number="1000000001"
    )


@pytest.fixture
def admin_service(bank, audit):
    """Create an AdminService that is already logged in."""
    service = AdminService(bank, audit)
    assert service.login("admin123")
    return service


@pytest.fixture
def legacy_data(data_path):
    """Write a data file with one account that predates passwords and PINs."""
    data_path.parent.mkdir(parents=True, exist_ok=True)
    data_path.write_text(
        json.dumps(
            {
                "2000000002": {
                    "accountNumber": "2000000002",
                    "customerName": "Legacy Larry",
                    "balance": 50.0,
                    "transactions": [
                        {"type": "DEPOSIT", "amount": 50.0, "dateTime": "2023-05-01T09:30:00"}
                    ],
                    "isLocked": True,
                }
            }
        )
    )
    return data_path


@pytest.fixture
def read_audit(audit_path):
    """Return a function that reads the audit log lines."""

    def _read():
        if not audit_path.exists():
            return []
        return audit_path.read_text().splitlines()

    return _read


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(data_path, audit_path):
    """Global CLI options pointing at temporary data and audit files."""
    return ["--data-path", str(data_path), "--audit-log", str(audit_path)]
