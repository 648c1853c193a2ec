"""Direction classification (money in vs money out) by keyword evidence."""

import logging

from ..models import Direction

logger = logging.getLogger(__name__)

INCOMING_KEYWORDS = [
    "credited to",
    "credited in",
    "credited",
    "received from",
    "received in",
    "received",
    "refund",
    "refunded",
    "cashback",
    "you received",
    "got money",
    "incoming",
    "deposited",
    "deposit to",
]

OUTGOING_KEYWORDS = [
    "debited from",
    "debited",
    "paid to",
    "paid for",
    "paid",
    "sent to",
    "sent",
    "transferred to",
    "transferred",
    "you paid",
    "you sent",
    "purchase",
    "withdrawn",
    "spent",
]


def count_keywords(text: str, keywords: list[str]) -> int:
    """Count how many keywords occur in text (each keyword counts once)."""
    return sum(1 for keyword in keywords if keyword in text)


def classify_direction(text: str) -> Direction:
    """
    Decide whether a message describes incoming or outgoing money.

    Ties go to OUTGOING. The second rule is subsumed by the first and is kept
    as-is: incoming wins only with more matches, or with any match when there
    is no outgoing evidence at all.

    Args:
        text: Raw message text

    Returns:
        INCOMING or OUTGOING
    """
    lower_text = text.lower()
    incoming = count_keywords(lower_text, INCOMING_KEYWORDS)
    outgoing = count_keywords(lower_text, OUTGOING_KEYWORDS)

    if incoming > outgoing:
        direction = Direction.INCOMING
    elif incoming > 0 and outgoing == 0:
        direction = Direction.INCOMING
    else:
        direction = Direction.OUTGOING

    logger.debug(
        f"Keyword evidence: incoming={incoming}, outgoing={outgoing} -> {direction.value}"
    )
    return direction
