"""PaySplit - Turn payment messages into shared expenses and settle up."""

__version__ = "0.1.0"

from .config import Settings, load_settings
from .models import (
    SELF,
    Balance,
    Direction,
    ParseResult,
    PaymentMessage,
    Transaction,
    Transfer,
)
from .parsing import MessageParser, parse_message
from .service import LedgerService
from .settlement import apply_transfers, compute_balances, compute_settlements

__all__ = [
    "Settings",
    "load_settings",
    "SELF",
    "Balance",
    "Direction",
    "ParseResult",
    "PaymentMessage",
    "Transaction",
    "Transfer",
    "MessageParser",
    "parse_message",
    "LedgerService",
    "apply_transfers",
    "compute_balances",
    "compute_settlements",
]
