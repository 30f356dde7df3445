import sys
import os
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    AccountSummary,
    ClientAccount,
    Deposit,
    Dispute,
    DisputeStatus,
    ProcessingResult,
    ProcessingStats,
    StoredTransaction,
)


class TestRecords:
    def test_create_deposit(self):
        deposit = Deposit(client_id=1, transaction_id=1, amount=Decimal("100.0"))
        assert deposit.client_id == 1
        assert deposit.transaction_id == 1
        assert deposit.amount == Decimal("100.0")

    def test_dispute_has_no_amount(self):
        dispute = Dispute(client_id=1, transaction_id=1)
        assert not hasattr(dispute, "amount")

    def test_dispute_rejects_amount(self):
        with pytest.raises(TypeError):
            Dispute(client_id=1, transaction_id=1, amount=Decimal("1"))

    def test_records_are_frozen(self):
        deposit = Deposit(client_id=1, transaction_id=1, amount=Decimal("1"))
        with pytest.raises(FrozenInstanceError):
            deposit.amount = Decimal("2")


class TestStoredTransaction:
    def test_starts_undisputed(self):
        stored = StoredTransaction(client_id=1, amount=Decimal("10"))
        assert stored.dispute_status == DisputeStatus.UNDISPUTED

    def test_is_frozen(self):
        stored = StoredTransaction(client_id=1, amount=Decimal("10"))
        with pytest.raises(FrozenInstanceError):
            stored.dispute_status = DisputeStatus.DISPUTED


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Decimal("0")
        assert account.held == Decimal("0")
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Decimal("100"),
            held=Decimal("50"),
        )
        assert account.total == Decimal("150")


class TestAccountSummary:
    def test_unpacks_as_tuple(self):
        summary = AccountSummary(1, Decimal("1"), Decimal("2"), Decimal("3"), False)
        client_id, available, held, total, locked = summary
        assert (client_id, total, locked) == (1, Decimal("3"), False)


class TestProcessingStats:
    def test_counts_results(self):
        stats = ProcessingStats()
        stats.record_result(ProcessingResult.SUCCESS)
        stats.record_result(ProcessingResult.SUCCESS)
        stats.record_result(ProcessingResult.IGNORED)
        stats.record_malformed()

        assert stats.processed == 2
        assert stats.ignored == 1
        assert stats.malformed == 1
