"""Amount extraction from payment message text."""

import logging
import re
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)

# Digits with optional thousands separators and up to two decimal places
_NUMBER = r"(\d+(?:,\d+)*(?:\.\d{1,2})?)"

# Ordered by priority: the first pattern class that matches decides the amount
AMOUNT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("rs", re.compile(r"[Rr][Ss]\.?\s*" + _NUMBER)),
    ("rupee_symbol", re.compile(r"₹\s*" + _NUMBER)),
    ("inr", re.compile(r"[Ii][Nn][Rr]\s*" + _NUMBER)),
    ("dollar", re.compile(r"\$\s*" + _NUMBER)),
    (
        "verb",
        re.compile(
            r"(?:paid|debited|sent|transferred|credited|received)\s+"
            r"(?:Rs\.?|₹|INR)?\s*" + _NUMBER,
            re.IGNORECASE,
        ),
    ),
]


def to_decimal(raw: str) -> Decimal | None:
    """Convert a matched number like ``1,234.50`` to Decimal."""
    try:
        return Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None


def extract_amount(text: str) -> Decimal | None:
    """
    Extract the first positive amount from message text.

    Pattern classes are tried in order (Rs, ₹, INR, $, payment verb) and the
    first class that matches ends the search, even when its number is unusable.

    Args:
        text: Raw message text

    Returns:
        The amount, or None if no pattern matched
    """
    for name, pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        amount = to_decimal(match.group(1))
        if amount is None or amount <= 0:
            logger.debug(f"Pattern '{name}' matched unusable amount {match.group(1)!r}")
            return None

        logger.debug(f"Pattern '{name}' matched amount {amount}")
        return amount

    return None
