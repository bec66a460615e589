"""Tests for the Bank registry and customer authentication."""

import logging
import random
import pytest
from decimal import Decimal

from simplebank.domain.bank import Bank
from simplebank.domain.errors import (
    AccountLockedError,
    AccountNotFoundError,
    AuthenticationError,
    DuplicateAccountNumberError,
    InsufficientBalanceError,
    InvalidAccountNumberError,
    InvalidPinFormatError,
    MigrationCancelledError,
    PersistenceError,
)
from simplebank.storage.json_store import JsonFileStorage


def complete_migration(helper):
    """Migration runner that answers every prompt correctly."""
    helper.verify_identity(helper.account.account_number)
    helper.set_password("newpass", "newpass")
    helper.set_pin("4321", "4321")


class TestCreateAccount:
    """Tests for account opening."""

    def test_create_with_number(self, bank, read_audit):
        """Test creating an account with a chosen number."""
        account = bank.create_account("Alice", "p1", "1234", account_number=" 1000000001 ")

        assert account.account_number == "1000000001"
        assert account.balance == Decimal("0")
        assert bank.get_account("1000000001") is account
        assert bank.account_exists("1000000001")
        assert "ACTION=ACCOUNT_CREATE account=1000000001" in read_audit()[-1]

    @pytest.mark.parametrize("number", [None, "", "   "])
    def test_create_generates_number(self, bank, number):
        """Test blank numbers are replaced by a generated 10 digit number."""
        account = bank.create_account("Bob", "pw", "0000", account_number=number)
        assert len(account.account_number) == 10
        assert account.account_number.isdigit()
        assert bank.get_account(account.account_number) is account

    def test_generated_numbers_skip_collisions(self, storage, audit):
        """Test a generated number already in use is regenerated."""
        taken = Bank(storage, audit, rng=random.Random(7)).create_account("X", "pw", "0000")

        bank = Bank(storage, audit, rng=random.Random(7))
        bank.create_account("First", "pw", "0000", account_number=taken.account_number)
        second = bank.create_account("Second", "pw", "0000")

        assert second.account_number != taken.account_number
        assert bank.total_accounts() == 2

    def test_duplicate_number(self, bank, alice):
        """Test an existing number is rejected and the original kept."""
        with pytest.raises(DuplicateAccountNumberError):
            bank.create_account("Mallory", "pw", "0000", account_number="1000000001")
        assert bank.get_account("1000000001").customer_name == "Alice"

    @pytest.mark.parametrize(
        "number",
        [
            "1\n[2024-01-01 00:00:00] ACTION=ADMIN_LOGIN admin=ADMIN status=SUCCESS",
            "12 34",
            "12\r34",
            "12\t34",
            "12\x0034",
        ],
    )
    def test_invalid_account_number(self, bank, read_audit, number):
        """Test numbers with whitespace or control characters are rejected."""
        with pytest.raises(InvalidAccountNumberError):
            bank.create_account("Mallory", "pw", "1234", account_number=number)
        assert bank.total_accounts() == 0
        assert read_audit() == []

    @pytest.mark.parametrize("pin", ["", "123", "12345", "abcd"])
    def test_invalid_pin(self, bank, pin):
        """Test invalid PINs prevent account creation."""
        with pytest.raises(InvalidPinFormatError):
            bank.create_account("Bob", "pw", pin, account_number="3")
        assert not bank.account_exists("3")

    def test_keys_match_account_numbers(self, bank):
        """Test every registry key is its account's own number."""
        for name in ("A", "B", "C"):
            bank.create_account(name, "pw", "0000")
        for summary in bank.list_accounts():
            assert bank.get_account(summary.account_number).account_number == summary.account_number


class TestAuthenticateUser:
    """Tests for password login."""

    def test_success(self, bank, alice, read_audit):
        """Test logging in with the right password."""
        assert bank.authenticate_user("1000000001", "p1") is alice
        assert "ACTION=LOGIN account=1000000001 status=SUCCESS" in read_audit()[-1]

    def test_unknown_account(self, bank, read_audit):
        """Test logging into a missing account."""
        with pytest.raises(AccountNotFoundError):
            bank.authenticate_user("404", "pw")
        assert "details=Account not found" in read_audit()[-1]

    def test_wrong_password(self, bank, alice, read_audit):
        """Test logging in with a wrong password."""
        with pytest.raises(AuthenticationError):
            bank.authenticate_user("1000000001", "wrong")
        assert "ACTION=WRONG_PASSWORD account=1000000001" in read_audit()[-1]

    def test_locked_account_rejected_before_password(self, bank, alice, read_audit):
        """Test a locked account fails even with the right password."""
        bank.lock_account("1000000001")

        with pytest.raises(AccountLockedError):
            bank.authenticate_user("1000000001", "p1")
        with pytest.raises(AccountLockedError):
            bank.authenticate_user("1000000001", "wrong")

        assert "details=Account locked" in read_audit()[-1]
        assert not any("WRONG_PASSWORD" in line for line in read_audit())


class TestAuthenticateWithMigration:
    """Tests for login with legacy account migration."""

    def test_regular_account(self, bank, alice):
        """Test accounts with credentials use the password."""
        asked = []

        def read_password():
            asked.append(True)
            return "p1"

        def no_migration(helper):
            raise AssertionError("migration should not run")

        assert bank.authenticate_user_with_migration("1000000001", read_password, no_migration) is alice
        assert asked == [True]

    def test_regular_account_locked(self, bank, alice):
        """Test the lock is still enforced."""
        bank.lock_account("1000000001")
        with pytest.raises(AccountLockedError):
            bank.authenticate_user_with_migration("1000000001", lambda: "p1", complete_migration)

    def test_unknown_account(self, bank):
        """Test a missing account is reported."""
        with pytest.raises(AccountNotFoundError):
            bank.authenticate_user_with_migration("404", lambda: "pw", complete_migration)

    def test_legacy_account_is_migrated(self, bank, legacy_data, read_audit):
        """Test a legacy account is migrated, saved and no session is returned."""
        bank.load()

        def read_password():
            raise AssertionError("password should not be asked during migration")

        result = bank.authenticate_user_with_migration("2000000002", read_password, complete_migration)

        assert result is None
        account = bank.get_account("2000000002")
        assert not account.needs_migration
        assert not account.is_locked
        assert "ACTION=MIGRATION account=2000000002" in read_audit()[-1]

        reloaded = JsonFileStorage(legacy_data).load()["2000000002"]
        assert reloaded.pin == "4321"

        assert bank.authenticate_user_with_migration("2000000002", lambda: "newpass", complete_migration) is account

    def test_legacy_account_migration_cancelled(self, bank, legacy_data):
        """Test a cancelled migration leaves the account untouched."""
        bank.load()

        def wrong_number(helper):
            helper.verify_identity("0000000000")

        with pytest.raises(MigrationCancelledError):
            bank.authenticate_user_with_migration("2000000002", lambda: "pw", wrong_number)

        account = bank.get_account("2000000002")
        assert account.needs_migration
        assert account.is_locked

    def test_legacy_account_migration_abandoned(self, bank, legacy_data):
        """Test a runner that stops early counts as cancelled."""
        bank.load()
        with pytest.raises(MigrationCancelledError):
            bank.authenticate_user_with_migration("2000000002", lambda: "pw", lambda helper: None)


class TestMigrateAccount:
    """Tests for the stand-alone migration entry point."""

    def test_migrate_legacy(self, bank, legacy_data):
        """Test migrating a legacy account."""
        bank.load()
        assert bank.migrate_account("2000000002", complete_migration) is True
        assert not bank.get_account("2000000002").needs_migration

    def test_already_migrated(self, bank, alice):
        """Test accounts with credentials are left alone."""
        assert bank.migrate_account("1000000001", complete_migration) is False
        assert bank.authenticate_user("1000000001", "p1") is alice

    def test_unknown(self, bank):
        """Test migrating a missing account."""
        with pytest.raises(AccountNotFoundError):
            bank.migrate_account("404", complete_migration)


class TestBankOperations:
    """Tests for registry-level operations."""

    def test_alice_scenario(self, bank, alice):
        """Test the deposit/withdraw walkthrough."""
        bank.deposit("1000000001", Decimal("100"))
        assert alice.balance == Decimal("100")
        assert len(alice.transactions) == 1

        bank.withdraw("1000000001", Decimal("30"), "1234")
        assert alice.balance == Decimal("70")
        assert len(alice.transactions) == 2

        with pytest.raises(InsufficientBalanceError):
            bank.withdraw("1000000001", Decimal("1000"), "1234")
        assert alice.balance == Decimal("70")
        assert len(alice.transactions) == 2

    def test_locked_account_withdraw_not_blocked(self, bank, alice):
        """Test locking does not stop a direct withdrawal with the right PIN."""
        bank.deposit("1000000001", Decimal("100"))
        assert bank.lock_account("1000000001")

        bank.withdraw("1000000001", Decimal("40"), "1234")

        assert alice.balance == Decimal("60")

    def test_operations_on_unknown_account(self, bank):
        """Test deposit and withdraw require an existing account."""
        with pytest.raises(AccountNotFoundError):
            bank.deposit("404", Decimal("1"))
        with pytest.raises(AccountNotFoundError):
            bank.withdraw("404", Decimal("1"), "1234")

    def test_lock_unlock(self, bank, alice):
        """Test lock and unlock report whether the account exists."""
        assert bank.lock_account("1000000001")
        assert alice.is_locked
        assert bank.unlock_account("1000000001")
        assert not alice.is_locked
        assert not bank.lock_account("404")
        assert not bank.unlock_account("404")

    def test_total_balance(self, bank, alice):
        """Test the bank total equals the sum of derived balances."""
        bob = bank.create_account("Bob", "pw", "0000", account_number="1000000002")
        bank.deposit("1000000001", Decimal("100"))
        bank.deposit("1000000002", Decimal("50.25"))
        bank.withdraw("1000000002", Decimal("0.25"), "0000")

        assert bank.get_total_bank_balance() == Decimal("150")
        assert bank.get_total_bank_balance() == alice.derived_balance() + bob.derived_balance()

    def test_total_balance_empty(self, bank):
        """Test an empty bank holds nothing."""
        assert bank.get_total_bank_balance() == Decimal("0")
        assert bank.total_accounts() == 0

    def test_read_only_views(self, bank, alice):
        """Test listing and detail views do not change state."""
        bank.deposit("1000000001", Decimal("10"))

        summaries = bank.list_accounts()
        details = bank.account_details("1000000001")
        history = bank.get_transactions("1000000001")

        assert [s.account_number for s in summaries] == ["1000000001"]
        assert details.balance == Decimal("10")
        assert details.transaction_count == 1
        assert isinstance(history, tuple)
        assert alice.balance == Decimal("10")
        assert len(alice.transactions) == 1

    def test_account_details_unknown(self, bank):
        """Test detail views of missing accounts."""
        with pytest.raises(AccountNotFoundError):
            bank.account_details("404")
        with pytest.raises(AccountNotFoundError):
            bank.get_transactions("404")


class TestPersistence:
    """Tests for loading and saving the registry."""

    def test_save_and_load(self, bank, alice, storage, audit):
        """Test a saved registry loads with the same state."""
        bank.deposit("1000000001", Decimal("100"))
        bank.withdraw("1000000001", Decimal("30"), "1234")
        bank.save()

        reloaded = Bank(storage, audit)
        reloaded.load()

        account = reloaded.get_account("1000000001")
        assert account.balance == Decimal("70")
        assert [t.kind for t in account.transactions] == [t.kind for t in alice.transactions]
        assert reloaded.authenticate_user("1000000001", "p1") is account

    def test_loaded_accounts_are_audited(self, bank, alice, storage, audit, read_audit):
        """Test accounts loaded from storage write audit events."""
        bank.save()
        reloaded = Bank(storage, audit)
        reloaded.load()

        reloaded.deposit("1000000001", Decimal("5"))

        assert "ACTION=DEPOSIT account=1000000001" in read_audit()[-1]

    def test_load_missing_file(self, bank):
        """Test a missing data file starts an empty bank."""
        bank.load()
        assert bank.total_accounts() == 0

    def test_load_malformed_file(self, bank, data_path, caplog):
        """Test malformed data is logged and the bank starts empty."""
        data_path.parent.mkdir(parents=True)
        data_path.write_text("{not json")

        with caplog.at_level(logging.ERROR):
            bank.load()

        assert bank.total_accounts() == 0
        assert "Could not load account data" in caplog.text

    def test_load_warns_on_balance_mismatch(self, bank, data_path, caplog):
        """Test a stored balance that disagrees with its history is reported."""
        data_path.parent.mkdir(parents=True)
        data_path.write_text(
            '{"1": {"accountNumber": "1", "customerName": "X", "balance": 10,'
            ' "transactions": [], "passwordHash": "h", "pin": "1234", "isLocked": false}}'
        )

        with caplog.at_level(logging.WARNING):
            bank.load()

        assert bank.get_account("1").balance == Decimal("10")
        assert "does not match its transactions" in caplog.text

    def test_save_failure_keeps_memory_state(self, audit, tmp_path):
        """Test a failed save is reported and the mutation stays in memory."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        bank = Bank(JsonFileStorage(blocker / "bank_data.json"), audit)
        account = bank.create_account("Bob", "pw", "0000", account_number="5")
        account.deposit(Decimal("20"))

        with pytest.raises(PersistenceError):
            bank.save()

        assert bank.get_account("5").balance == Decimal("20")
