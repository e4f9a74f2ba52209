"""Errors raised at the input boundary.

Ledger rule violations are not exceptions; the processor reports them
through ProcessingResult.
"""


class PaymentsError(Exception):
    """Base exception for all payments engine errors."""


class DecimalParseError(PaymentsError, ValueError):
    """Raised when text cannot be parsed as a fixed-point amount."""


class TransactionParseError(PaymentsError, ValueError):
    """Raised when an input row cannot be turned into a Transaction."""


class TransactionError(TransactionParseError):
    """Raised when a Transaction is constructed with invalid fields."""
