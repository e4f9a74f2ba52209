import logging
from typing import Tuple, Optional

from models import Transaction, TransactionType, ClientAccount, HistoryEntry, ProcessingResult
from state import LedgerState

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to ledger state.
    Every check runs before any mutation, so a rejected transaction leaves state untouched.
    """

    def __init__(self, state: LedgerState):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS when applied, otherwise the reason it was rejected.
            Rejections are final; the transaction is simply dropped.
        """
        account = self._state.get_or_create_account(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                result = self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                result = self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                result = self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                result = self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                result = self._handle_chargeback(account, transaction)

        if not result.is_success:
            logger.debug(f"Rejected {transaction}: {result.value}")
        return result

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if self._state.has_transaction(transaction.transaction_id):
            logger.info(f"Deposit tx {transaction.transaction_id}: duplicate transaction id, skipping")
            return ProcessingResult.DUPLICATE_TRANSACTION

        if account.locked:
            return ProcessingResult.ACCOUNT_LOCKED

        account.credit(transaction.amount)
        self._state.record_deposit(transaction.transaction_id, account.client_id, transaction.amount)
        return ProcessingResult.SUCCESS

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if self._state.has_transaction(transaction.transaction_id):
            logger.info(f"Withdrawal tx {transaction.transaction_id}: duplicate transaction id, skipping")
            return ProcessingResult.DUPLICATE_TRANSACTION

        if account.locked:
            return ProcessingResult.ACCOUNT_LOCKED

        if account.available < transaction.amount:
            return ProcessingResult.INSUFFICIENT_FUNDS

        account.debit(transaction.amount)
        # Stored negative: never disputable, but the id stays reserved
        self._state.record_withdrawal(transaction.transaction_id, account.client_id, transaction.amount)
        return ProcessingResult.SUCCESS

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original, result = self._lookup_original(account, transaction)
        if original is None:
            return result

        if not original.is_deposit:
            logger.info(f"Dispute for tx {transaction.transaction_id}: only deposits can be disputed")
            return ProcessingResult.NOT_DISPUTABLE

        if original.disputed:
            logger.info(f"Dispute for tx {transaction.transaction_id}: transaction already disputed")
            return ProcessingResult.ALREADY_DISPUTED

        # May push available below zero if the funds were already withdrawn
        original.disputed = True
        account.hold(original.amount)
        return ProcessingResult.SUCCESS

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original, result = self._lookup_disputed(account, transaction)
        if original is None:
            return result

        original.disputed = False
        account.release_hold(original.amount)
        return ProcessingResult.SUCCESS

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original, result = self._lookup_disputed(account, transaction)
        if original is None:
            return result

        original.disputed = False
        account.charge_back(original.amount)
        logger.info(f"Chargeback for tx {transaction.transaction_id}: client {account.client_id} locked")
        return ProcessingResult.SUCCESS

    def _lookup_original(
        self, account: ClientAccount, transaction: Transaction
    ) -> Tuple[Optional[HistoryEntry], ProcessingResult]:
        """Find the deposit/withdrawal a dispute-family transaction refers to."""
        if account.locked:
            return None, ProcessingResult.ACCOUNT_LOCKED

        original = self._state.get_history_entry(transaction.transaction_id)
        if original is None:
            return None, ProcessingResult.UNKNOWN_TRANSACTION

        if original.client_id != transaction.client_id:
            logger.warning(
                f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: "
                f"client mismatch (expected {original.client_id}, got {transaction.client_id})"
            )
            return None, ProcessingResult.CLIENT_MISMATCH

        return original, ProcessingResult.SUCCESS

    def _lookup_disputed(
        self, account: ClientAccount, transaction: Transaction
    ) -> Tuple[Optional[HistoryEntry], ProcessingResult]:
        original, result = self._lookup_original(account, transaction)
        if original is None:
            return None, result

        if not original.disputed:
            return None, ProcessingResult.NOT_DISPUTED

        return original, ProcessingResult.SUCCESS
