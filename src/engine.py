import logging
from typing import Dict, Iterable, TextIO

from models import Transaction, ClientAccount, ProcessingResult, ProcessingStats
from processor import TransactionProcessor
from reader import read_transactions
from state import LedgerState

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Applies a stream of transactions to client accounts in arrival order.
    Single-threaded: one engine instance owns its state for a whole run.
    """

    def __init__(self):
        self._state = LedgerState()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def apply(self, transaction: Transaction) -> ProcessingResult:
        """Apply one transaction and record the outcome."""
        result = self._processor.process_transaction(transaction)
        self._stats.record(result)
        return result

    def process(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        """Apply every transaction and return final account states."""
        for transaction in transactions:
            self.apply(transaction)

        logger.info(self._stats.summary())
        logger.debug(f"{self._state.history_size()} transactions retained for disputes")
        return self.accounts

    def process_stream(self, stream: TextIO) -> Dict[int, ClientAccount]:
        """Process CSV text stream and return final account states."""
        return self.process(read_transactions(stream, self._stats))

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing transactions from {filepath}")
        # Undecodable bytes survive as surrogates and fail row parsing, not the whole read
        with open(filepath, "r", encoding="utf-8", newline="", errors="surrogateescape") as f:
            return self.process_stream(f)

    @property
    def accounts(self) -> Dict[int, ClientAccount]:
        return self._state.get_all_accounts()
