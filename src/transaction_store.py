import logging
from dataclasses import replace
from typing import Dict, Optional

from account_ledger import AccountLedger
from amounts import Amount
from models import ClientId, DisputeStatus, ProcessingResult, StoredTransaction, TransactionId

logger = logging.getLogger(__name__)


class TransactionStore:
    """
    Keeps deposits for later dispute lookups and drives their dispute lifecycle.
    Decides whether a record is legal and which ledger operation it implies.

    Dispute status only moves UNDISPUTED -> DISPUTED -> UNDISPUTED | CHARGED_BACK,
    and CHARGED_BACK is terminal. Withdrawals are never stored, so they cannot
    be disputed.
    """

    def __init__(self):
        self._transactions: Dict[TransactionId, StoredTransaction] = {}

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: TransactionId) -> bool:
        return transaction_id in self._transactions

    def get_transaction(self, transaction_id: TransactionId) -> Optional[StoredTransaction]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def apply_deposit(
        self, ledger: AccountLedger, transaction_id: TransactionId, client_id: ClientId, amount: Amount
    ) -> ProcessingResult:
        if transaction_id in self._transactions:
            logger.warning(f"Deposit tx {transaction_id}: duplicate transaction id, ignoring")
            return ProcessingResult.IGNORED

        if not ledger.credit_available(client_id, amount):
            logger.warning(f"Deposit tx {transaction_id}: refused by ledger for client {client_id}")
            return ProcessingResult.IGNORED

        self._transactions[transaction_id] = StoredTransaction(client_id=client_id, amount=amount)
        return ProcessingResult.SUCCESS

    def apply_withdrawal(
        self, ledger: AccountLedger, transaction_id: TransactionId, client_id: ClientId, amount: Amount
    ) -> ProcessingResult:
        if not ledger.debit_available(client_id, amount):
            logger.warning(f"Withdrawal tx {transaction_id}: refused by ledger for client {client_id}")
            return ProcessingResult.IGNORED
        return ProcessingResult.SUCCESS

    def apply_dispute(
        self, ledger: AccountLedger, transaction_id: TransactionId, client_id: ClientId
    ) -> ProcessingResult:
        original = self._find(transaction_id, client_id, "Dispute")
        if original is None:
            return ProcessingResult.IGNORED

        if original.dispute_status != DisputeStatus.UNDISPUTED:
            logger.warning(f"Dispute for tx {transaction_id}: transaction is {original.dispute_status.value}")
            return ProcessingResult.IGNORED

        ledger.move_to_held(client_id, original.amount)
        self._set_status(transaction_id, original, DisputeStatus.DISPUTED)
        return ProcessingResult.SUCCESS

    def apply_resolve(
        self, ledger: AccountLedger, transaction_id: TransactionId, client_id: ClientId
    ) -> ProcessingResult:
        original = self._find_disputed(transaction_id, client_id, "Resolve")
        if original is None:
            return ProcessingResult.IGNORED

        ledger.move_to_available(client_id, original.amount)
        self._set_status(transaction_id, original, DisputeStatus.UNDISPUTED)
        return ProcessingResult.SUCCESS

    def apply_chargeback(
        self, ledger: AccountLedger, transaction_id: TransactionId, client_id: ClientId
    ) -> ProcessingResult:
        original = self._find_disputed(transaction_id, client_id, "Chargeback")
        if original is None:
            return ProcessingResult.IGNORED

        ledger.charge_back(client_id, original.amount)
        self._set_status(transaction_id, original, DisputeStatus.CHARGED_BACK)
        return ProcessingResult.SUCCESS

    def _find(self, transaction_id: TransactionId, client_id: ClientId, action: str) -> Optional[StoredTransaction]:
        """Look up a deposit referenced by a dispute lifecycle record, None if it must be ignored."""
        original = self._transactions.get(transaction_id)

        if original is None:
            logger.warning(f"{action} for tx {transaction_id}: transaction not found")
            return None

        if original.client_id != client_id:
            logger.warning(f"{action} for tx {transaction_id}: client mismatch (expected {original.client_id}, got {client_id})")
            return None

        return original

    def _find_disputed(self, transaction_id: TransactionId, client_id: ClientId, action: str) -> Optional[StoredTransaction]:
        original = self._find(transaction_id, client_id, action)
        if original is None:
            return None

        if original.dispute_status != DisputeStatus.DISPUTED:
            logger.warning(f"{action} for tx {transaction_id}: transaction is not disputed ({original.dispute_status.value})")
            return None

        return original

    def _set_status(self, transaction_id: TransactionId, original: StoredTransaction, status: DisputeStatus) -> None:
        self._transactions[transaction_id] = replace(original, dispute_status=status)
