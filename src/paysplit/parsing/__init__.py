"""Extraction of transactions from free-text payment messages."""

from .amount import extract_amount
from .classifier import classify_direction
from .dates import extract_timestamp
from .description import extract_description
from .filters import is_payment_message
from .parser import MessageParser, parse_message
from .parties import resolve_parties

__all__ = [
    "extract_amount",
    "classify_direction",
    "extract_timestamp",
    "extract_description",
    "is_payment_message",
    "MessageParser",
    "parse_message",
    "resolve_parties",
]
