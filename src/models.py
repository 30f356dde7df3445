import threading
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from amounts import Amount, ZERO, checked_add

ClientId = int
TransactionId = int

CLIENT_ID_MAX = 2**16 - 1
TRANSACTION_ID_MAX = 2**32 - 1


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class DisputeStatus(Enum):
    UNDISPUTED = "undisputed"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


class ProcessingResult(Enum):
    SUCCESS = "success"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Deposit:
    client_id: ClientId
    transaction_id: TransactionId
    amount: Amount


@dataclass(frozen=True)
class Withdrawal:
    client_id: ClientId
    transaction_id: TransactionId
    amount: Amount


@dataclass(frozen=True)
class Dispute:
    client_id: ClientId
    transaction_id: TransactionId


@dataclass(frozen=True)
class Resolve:
    client_id: ClientId
    transaction_id: TransactionId


@dataclass(frozen=True)
class Chargeback:
    client_id: ClientId
    transaction_id: TransactionId


# Only deposits and withdrawals carry an amount.
Record = Union[Deposit, Withdrawal, Dispute, Resolve, Chargeback]

RECORD_TYPES = {
    TransactionType.DEPOSIT: Deposit,
    TransactionType.WITHDRAWAL: Withdrawal,
    TransactionType.DISPUTE: Dispute,
    TransactionType.RESOLVE: Resolve,
    TransactionType.CHARGEBACK: Chargeback,
}


@dataclass(frozen=True)
class StoredTransaction:
    """A deposit kept for later dispute lookups. The store swaps in a copy when dispute_status changes."""

    client_id: ClientId
    amount: Amount
    dispute_status: DisputeStatus = DisputeStatus.UNDISPUTED


@dataclass
class ClientAccount:
    client_id: ClientId
    available: Amount = ZERO
    held: Amount = ZERO
    locked: bool = False

    @property
    def total(self) -> Amount:
        return checked_add(self.available, self.held)


class AccountSummary(NamedTuple):
    client_id: ClientId
    available: Amount
    held: Amount
    total: Amount
    locked: bool


class ProcessingStats:
    """Thread-safe counters for tracking processing statistics."""

    def __init__(self):
        self._lock = threading.Lock()
        self.processed = 0
        self.ignored = 0
        self.malformed = 0

    def record_result(self, result: ProcessingResult) -> None:
        with self._lock:
            if result == ProcessingResult.SUCCESS:
                self.processed += 1
            else:
                self.ignored += 1

    def record_malformed(self):
        with self._lock:
            self.malformed += 1
