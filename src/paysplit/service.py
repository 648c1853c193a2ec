"""Service layer holding a group's roster, messages and transactions.

This module composes the parser and the settlement engine. Balances and
settlements are never stored; they are derived from the transactions on every
request.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal

from .config import Settings
from .exceptions import TransactionNotFoundError
from .models import (
    SELF,
    Balance,
    Direction,
    ParseResult,
    PaymentMessage,
    ScanReport,
    Transaction,
    Transfer,
)
from .parsing import MessageParser, is_payment_message
from .settlement import compute_balances, compute_settlements

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


class LedgerService:
    """In-memory ledger for one group of friends."""

    def __init__(self, settings: Settings, parser: MessageParser | None = None):
        """Initialize the ledger with the configured roster."""
        self.settings = settings
        self.parser = parser or MessageParser(settings.tzinfo)
        self._lock = threading.Lock()
        self._roster: list[str] = []
        self._messages: list[PaymentMessage] = []
        self._transactions: list[Transaction] = []

        for name in settings.roster:
            self.add_friend(name)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    @property
    def roster(self) -> list[str]:
        """Known friends, excluding "Me"."""
        with self._lock:
            return list(self._roster)

    def add_friend(self, name: str) -> bool:
        """
        Add a friend to the roster.

        Args:
            name: Display name

        Returns:
            True if added, False if the name was already on the roster

        Raises:
            ValueError: If the name is blank or the reserved self identifier
        """
        name = name.strip()
        if not name:
            raise ValueError("Friend name must not be blank")
        if name == SELF:
            raise ValueError(f"'{SELF}' is reserved for the device owner")

        with self._lock:
            if name in self._roster:
                return False
            self._roster.append(name)

        logger.info(f"Added friend: {name}")
        return True

    def remove_friend(self, name: str) -> None:
        """Remove a friend; their transactions stay in the ledger."""
        with self._lock:
            if name in self._roster:
                self._roster.remove(name)
                logger.info(f"Removed friend: {name}")

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    @property
    def messages(self) -> list[PaymentMessage]:
        """All stored messages, recognized or not."""
        with self._lock:
            return list(self._messages)

    def unprocessed_messages(self) -> list[PaymentMessage]:
        """Messages that did not yield a transaction, kept for manual follow-up."""
        with self._lock:
            return [message for message in self._messages if not message.processed]

    def add_message(
        self, text: str, timestamp_ms: int, sender: str = ""
    ) -> ParseResult:
        """
        Store a message and add the transaction parsed from it, if any.

        Args:
            text: Message text
            timestamp_ms: Receipt time in epoch milliseconds
            sender: Optional sender address

        Returns:
            The parse result
        """
        message = PaymentMessage(sender=sender, body=text, timestamp_ms=timestamp_ms)
        result = self.parser.execute(text, self.roster, timestamp_ms)
        self._record(message, result)
        return result

    def scan_messages(
        self,
        messages: list[PaymentMessage],
        now_ms: int,
        days_back: int | None = None,
    ) -> ScanReport:
        """
        Parse a batch of device messages in parallel.

        Only payment-like messages received within the last ``days_back`` days
        are parsed. Each message is an independent unit of work; results are
        recorded in input order.

        Args:
            messages: Messages exported from the device
            now_ms: Current time in epoch milliseconds
            days_back: Window size, defaults to the configured value

        Returns:
            Summary of detected and unrecognized messages
        """
        if days_back is None:
            days_back = self.settings.scan_days_back
        cutoff_ms = now_ms - days_back * DAY_MS

        candidates = [
            message
            for message in messages
            if message.timestamp_ms > cutoff_ms
            and is_payment_message(message.sender, message.body)
        ]
        report = ScanReport(
            scanned=len(messages), skipped=len(messages) - len(candidates)
        )

        if not candidates:
            logger.info(f"No payment messages among {len(messages)} scanned")
            return report

        roster = self.roster
        # Indexed by position, message ids are not unique across exports
        results: list[ParseResult | None] = [None] * len(candidates)

        logger.info(f"Parsing {len(candidates)} payment messages (parallel)")

        with ThreadPoolExecutor(max_workers=self.settings.scan_max_workers) as executor:
            future_to_index = {
                executor.submit(
                    self.parser.execute, message.body, roster, message.timestamp_ms
                ): index
                for index, message in enumerate(candidates)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    logger.error(f"Error parsing message {candidates[index].id}: {e}")
                    results[index] = ParseResult(success=False, reason=str(e))

        for message, result in zip(candidates, results):
            stored = self._record(message.model_copy(), result)
            if result.transaction is not None:
                report.transactions.append(result.transaction)
            else:
                report.unrecognized.append(stored)

        logger.info(
            f"Scan complete: {len(report.transactions)} transactions, "
            f"{len(report.unrecognized)} unrecognized, {report.skipped} skipped"
        )
        return report

    def _record(self, message: PaymentMessage, result: ParseResult) -> PaymentMessage:
        """Store a message and, on success, its transaction."""
        with self._lock:
            self._messages.append(message)
            if result.transaction is not None:
                self._transactions.append(result.transaction)
                message.processed = True

        if result.transaction is None:
            logger.warning(f"Message not recognized as a transaction: {message.body[:60]!r}")
        return message

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @property
    def transactions(self) -> list[Transaction]:
        """All transactions, parsed and manual."""
        with self._lock:
            return list(self._transactions)

    def add_transaction(
        self,
        description: str,
        amount: Decimal,
        counterparty: str,
        participants: list[str],
        timestamp_ms: int,
        direction: Direction = Direction.OUTGOING,
    ) -> Transaction:
        """
        Add a manually entered transaction.

        Raises:
            pydantic.ValidationError: If the transaction breaks an invariant
        """
        transaction = Transaction(
            description=description,
            amount=amount,
            direction=direction,
            counterparty=counterparty,
            participants=participants,
            timestamp_ms=timestamp_ms,
            auto_detected=False,
        )

        with self._lock:
            self._transactions.append(transaction)

        logger.info(f"Added manual transaction {transaction.id}: {description} {amount}")
        return transaction

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Look up a transaction by id."""
        with self._lock:
            return self._transactions[self._index_of(transaction_id)]

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Delete a transaction and return it."""
        with self._lock:
            transaction = self._transactions.pop(self._index_of(transaction_id))

        logger.info(f"Deleted transaction {transaction_id}")
        return transaction

    def update_participants(
        self, transaction_id: str, participants: list[str]
    ) -> Transaction:
        """
        Replace the participants of a transaction, keeping every other field.

        Raises:
            TransactionNotFoundError: If the id is unknown
            pydantic.ValidationError: If the new participants break an invariant
        """
        with self._lock:
            index = self._index_of(transaction_id)
            updated = self._transactions[index].with_participants(participants)
            self._transactions[index] = updated

        logger.info(
            f"Updated participants of {transaction_id}: {', '.join(updated.participants)}"
        )
        return updated

    def _index_of(self, transaction_id: str) -> int:
        """Position of a transaction; caller holds the lock."""
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return index
        raise TransactionNotFoundError(transaction_id)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def balances(self) -> list[Balance]:
        """Current net balance of everyone in the group."""
        return compute_balances(self.transactions, self.roster)

    def settlements(self) -> list[Transfer]:
        """Current settle-up plan."""
        return compute_settlements(
            self.balances(), tolerance=self.settings.settlement_tolerance
        )
