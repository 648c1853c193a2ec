"""Custom exceptions for PaySplit."""


class PaySplitError(Exception):
    """Base exception for all PaySplit errors."""

    pass


class ConfigurationError(PaySplitError):
    """Raised when configuration is invalid or missing."""

    pass


class ParseError(PaySplitError):
    """Base class for message parsing errors."""

    pass


class AmountNotFoundError(ParseError):
    """Raised when no currency pattern matches a message."""

    def __init__(self, text: str, message: str | None = None):
        self.text = text
        super().__init__(message or f"No amount found in message: {text[:60]!r}")


class DateParseAnomaly(ParseError):
    """Raised when a date-like substring holds out-of-range values."""

    pass


class LedgerError(PaySplitError):
    """Base class for ledger errors."""

    pass


class TransactionNotFoundError(LedgerError):
    """Raised when a transaction id is not in the ledger."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class SettlementError(LedgerError):
    """Raised when a transfer cannot be applied to a set of balances."""

    pass
