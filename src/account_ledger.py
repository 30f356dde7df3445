import logging
from typing import Dict, Iterator, Optional

from amounts import Amount, checked_add, checked_sub
from models import AccountSummary, ClientAccount, ClientId

logger = logging.getLogger(__name__)


class AccountLedger:
    """
    Per-client balances and the account lock policy.
    Not thread-safe: the driver owns it and applies records one at a time.

    Every mutating operation returns True if it was accepted. Insufficient
    funds, unknown clients and locked accounts never raise.
    """

    def __init__(self):
        self._accounts: Dict[ClientId, ClientAccount] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, client_id: ClientId) -> bool:
        return client_id in self._accounts

    def get_account(self, client_id: ClientId) -> Optional[ClientAccount]:
        """Retrieve an account by client ID. Callers must treat it as read-only."""
        return self._accounts.get(client_id)

    def credit_available(self, client_id: ClientId, amount: Amount) -> bool:
        """Add funds to available, creating the account on first use. Refused on locked accounts."""
        account = self._accounts.get(client_id)
        if account is None:
            account = ClientAccount(client_id=client_id)
            account.available = checked_add(account.available, amount)
            self._accounts[client_id] = account
            return True

        if account.locked:
            logger.warning(f"Client {client_id}: account locked, credit of {amount} refused")
            return False

        available = checked_add(account.available, amount)
        # total is derived on output, so it has to stay representable as well
        checked_add(available, account.held)
        account.available = available
        return True

    def debit_available(self, client_id: ClientId, amount: Amount) -> bool:
        """
        Remove funds from available.
        Refused on unknown or locked accounts and when available is insufficient.
        """
        account = self._accounts.get(client_id)
        if account is None:
            logger.warning(f"Client {client_id}: no account, debit of {amount} refused")
            return False

        if account.locked:
            logger.warning(f"Client {client_id}: account locked, debit of {amount} refused")
            return False

        if amount > account.available:
            logger.warning(f"Client {client_id}: insufficient funds, debit of {amount} exceeds available {account.available}")
            return False

        account.available = checked_sub(account.available, amount)
        return True

    def move_to_held(self, client_id: ClientId, amount: Amount) -> bool:
        """Hold up to `amount` of available funds."""
        account = self._accounts.get(client_id)
        if account is None:
            logger.warning(f"Client {client_id}: no account, hold of {amount} refused")
            return False

        moved = min(amount, account.available)
        if moved < amount:
            logger.info(f"Client {client_id}: hold of {amount} clamped to available {moved}")

        account.available = checked_sub(account.available, moved)
        account.held = checked_add(account.held, moved)
        return True

    def move_to_available(self, client_id: ClientId, amount: Amount) -> bool:
        """Release up to `amount` of held funds back to available."""
        account = self._accounts.get(client_id)
        if account is None:
            logger.warning(f"Client {client_id}: no account, release of {amount} refused")
            return False

        moved = min(amount, account.held)
        if moved < amount:
            logger.info(f"Client {client_id}: release of {amount} clamped to held {moved}")

        account.held = checked_sub(account.held, moved)
        account.available = checked_add(account.available, moved)
        return True

    def charge_back(self, client_id: ClientId, amount: Amount) -> bool:
        """Destroy up to `amount` of held funds and lock the account for good."""
        account = self._accounts.get(client_id)
        if account is None:
            logger.warning(f"Client {client_id}: no account, chargeback of {amount} refused")
            return False

        removed = min(amount, account.held)
        if removed < amount:
            logger.info(f"Client {client_id}: chargeback of {amount} clamped to held {removed}")

        account.held = checked_sub(account.held, removed)
        account.locked = True
        return True

    def snapshot(self) -> Iterator[AccountSummary]:
        """Yield one summary per account in ascending client ID order."""
        for client_id in sorted(self._accounts):
            account = self._accounts[client_id]
            yield AccountSummary(
                client_id=client_id,
                available=account.available,
                held=account.held,
                total=account.total,
                locked=account.locked,
            )
