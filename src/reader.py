import csv
import logging
from typing import Dict, Iterator, Optional, TextIO

from exceptions import DecimalParseError, TransactionParseError
from fixed_decimal import FixedDecimal
from models import Transaction, TransactionType, ProcessingStats

logger = logging.getLogger(__name__)


def _parse_id(normalized: Dict[str, str], field: str) -> int:
    value = normalized.get(field, "")
    if not (value.isascii() and value.isdigit()):
        raise TransactionParseError(f"Invalid {field} id: {value!r}")
    return int(value)


def parse_row(row: Dict[Optional[str], object]) -> Transaction:
    """
    Parse CSV row into Transaction.

    Raises:
        TransactionParseError: unknown type, bad ids, or a missing/invalid amount
            on a deposit or withdrawal.
    """
    # Short rows come back with None values, long rows with a None key
    normalized = {
        key.strip(): (value or "").strip()
        for key, value in row.items()
        if key is not None and not isinstance(value, list)
    }

    type_str = normalized.get("type", "").lower()
    try:
        transaction_type = TransactionType(type_str)
    except ValueError:
        raise TransactionParseError(f"Unknown transaction type: {type_str!r}") from None

    client_id = _parse_id(normalized, "client")
    transaction_id = _parse_id(normalized, "tx")

    amount = None
    amount_str = normalized.get("amount", "")
    if transaction_type.requires_amount and amount_str:
        try:
            amount = FixedDecimal.parse(amount_str)
        except DecimalParseError as e:
            raise TransactionParseError(f"Invalid amount for tx {transaction_id}: {e}") from e

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def read_transactions(stream: TextIO, stats: Optional[ProcessingStats] = None) -> Iterator[Transaction]:
    """
    Lazily read transactions from a CSV stream, one row at a time.
    Malformed rows are logged and skipped.
    """
    reader = csv.DictReader(stream)
    for row in reader:
        try:
            yield parse_row(row)
        except TransactionParseError as e:
            logger.warning(f"Failed to parse row {reader.line_num}: {e}")
            if stats is not None:
                stats.record_malformed()
