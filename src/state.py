from typing import Dict, Optional

from fixed_decimal import FixedDecimal
from models import ClientAccount, HistoryEntry


class LedgerState:
    """
    Client accounts and transaction history for dispute lookups.
    Owned by a single engine; not safe for concurrent writers.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._history: Dict[int, HistoryEntry] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        account = self._accounts.get(client_id)
        if account is None:
            account = self._accounts[client_id] = ClientAccount(client_id=client_id)
        return account

    def has_transaction(self, transaction_id: int) -> bool:
        return transaction_id in self._history

    def record_deposit(self, transaction_id: int, client_id: int, amount: FixedDecimal) -> None:
        """Store a deposit for future dispute lookups."""
        self._history[transaction_id] = HistoryEntry(client_id=client_id, amount=amount, is_deposit=True)

    def record_withdrawal(self, transaction_id: int, client_id: int, amount: FixedDecimal) -> None:
        """Reserve a withdrawal id; stored negative and never disputable."""
        self._history[transaction_id] = HistoryEntry(client_id=client_id, amount=-amount, is_deposit=False)

    def get_history_entry(self, transaction_id: int) -> Optional[HistoryEntry]:
        return self._history.get(transaction_id)

    def history_size(self) -> int:
        return len(self._history)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
