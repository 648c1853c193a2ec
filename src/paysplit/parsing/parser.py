"""Message parser composing the individual extractors into a transaction."""

import logging
from datetime import timezone, tzinfo

from ..exceptions import AmountNotFoundError
from ..models import ParseResult, Transaction
from .amount import extract_amount
from .classifier import classify_direction
from .dates import extract_timestamp
from .description import extract_description
from .parties import resolve_parties

logger = logging.getLogger(__name__)


class MessageParser:
    """
    Turns free-text payment notifications into transactions.

    Flow:
    1. Extract the amount (no amount = no transaction)
    2. Classify the direction
    3. Resolve counterparty and participants
    4. Derive a description
    5. Recover the payment time, falling back to receipt time

    The parser holds no state between calls; one instance can be shared
    across threads.
    """

    def __init__(self, tz: tzinfo = timezone.utc):
        """
        Initialize the parser.

        Args:
            tz: Time zone for dates written in message text
        """
        self.tz = tz

    def execute(
        self, text: str, roster: list[str], message_timestamp_ms: int
    ) -> ParseResult:
        """
        Parse one message.

        Args:
            text: Raw message text
            roster: Known participant names, excluding "Me"
            message_timestamp_ms: Receipt time, used when the text has no date

        Returns:
            Parse result holding the transaction on success
        """
        amount = extract_amount(text)
        if amount is None:
            logger.debug(f"No amount in message: {text[:60]!r}")
            return ParseResult(transaction=None, success=False, reason="amount not found")

        direction = classify_direction(text)
        counterparty, participants = resolve_parties(text, roster, direction)
        description = extract_description(text, direction)
        timestamp_ms = extract_timestamp(text, message_timestamp_ms, self.tz)

        transaction = Transaction(
            description=description,
            amount=amount,
            direction=direction,
            counterparty=counterparty,
            participants=participants,
            timestamp_ms=timestamp_ms,
            auto_detected=True,
        )

        logger.info(
            f"Parsed {direction.value.lower()} {amount} '{description}' "
            f"(counterparty: {counterparty}, split: {', '.join(participants)})"
        )

        return ParseResult(transaction=transaction, success=True)

    def parse_or_raise(
        self, text: str, roster: list[str], message_timestamp_ms: int
    ) -> Transaction:
        """Parse one message, raising AmountNotFoundError when it is not a payment."""
        result = self.execute(text, roster, message_timestamp_ms)
        if result.transaction is None:
            raise AmountNotFoundError(text)
        return result.transaction


def parse_message(
    text: str,
    roster: list[str],
    message_timestamp_ms: int,
    tz: tzinfo = timezone.utc,
) -> Transaction | None:
    """Parse one message into a transaction, or None if it is not recognized."""
    return MessageParser(tz).execute(text, roster, message_timestamp_ms).transaction
