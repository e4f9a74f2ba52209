from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from exceptions import TransactionError
from fixed_decimal import FixedDecimal

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def requires_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class ProcessingResult(Enum):
    SUCCESS = "success"
    DUPLICATE_TRANSACTION = "duplicate_transaction"
    ACCOUNT_LOCKED = "account_locked"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_TRANSACTION = "unknown_transaction"
    CLIENT_MISMATCH = "client_mismatch"
    NOT_DISPUTABLE = "not_disputable"
    ALREADY_DISPUTED = "already_disputed"
    NOT_DISPUTED = "not_disputed"

    @property
    def is_success(self) -> bool:
        return self is ProcessingResult.SUCCESS


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[FixedDecimal] = None

    def __post_init__(self):
        if not 0 <= self.client_id <= MAX_CLIENT_ID:
            raise TransactionError(f"Client id out of range: {self.client_id}")
        if not 0 <= self.transaction_id <= MAX_TRANSACTION_ID:
            raise TransactionError(f"Transaction id out of range: {self.transaction_id}")

        if self.transaction_type.requires_amount:
            if self.amount is None:
                raise TransactionError(
                    f"{self.transaction_type.value.capitalize()} tx {self.transaction_id}: missing amount"
                )
            if self.amount.is_negative():
                raise TransactionError(
                    f"{self.transaction_type.value.capitalize()} tx {self.transaction_id}: negative amount {self.amount}"
                )

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: FixedDecimal = FixedDecimal.ZERO
    held: FixedDecimal = FixedDecimal.ZERO
    locked: bool = False

    @property
    def total(self) -> FixedDecimal:
        return self.available + self.held

    def credit(self, amount: FixedDecimal) -> None:
        self.available += amount

    def debit(self, amount: FixedDecimal) -> None:
        self.available -= amount

    def hold(self, amount: FixedDecimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: FixedDecimal) -> None:
        self.held -= amount
        self.available += amount

    def charge_back(self, amount: FixedDecimal) -> None:
        """Remove held funds and lock the account for good."""
        # held only grows through a dispute of this same entry
        assert self.held >= amount, f"client {self.client_id}: held {self.held} < chargeback {amount}"
        self.held -= amount
        self.locked = True


@dataclass
class HistoryEntry:
    """
    Accepted deposit or withdrawal kept for dispute lookups.
    Withdrawals are stored with a negative amount and is_deposit=False;
    only deposits can be disputed, including zero-amount ones.
    """

    client_id: int
    amount: FixedDecimal
    is_deposit: bool
    disputed: bool = False


@dataclass
class ProcessingStats:
    """Counters for tracking processing statistics."""

    processed: int = 0
    malformed: int = 0
    rejected: Counter = field(default_factory=Counter)

    def record(self, result: ProcessingResult) -> None:
        if result.is_success:
            self.processed += 1
        else:
            self.rejected[result] += 1

    def record_malformed(self) -> None:
        self.malformed += 1

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())

    def summary(self) -> str:
        line = f"Processed: {self.processed}, Rejected: {self.total_rejected}, Malformed: {self.malformed}"
        if self.rejected:
            counts = sorted((result.value, count) for result, count in self.rejected.items())
            reasons = ", ".join(f"{reason}={count}" for reason, count in counts)
            line = f"{line} ({reasons})"
        return line
