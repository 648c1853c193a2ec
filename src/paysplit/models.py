"""Pydantic domain models for PaySplit."""

import uuid
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SELF = "Me"  # the device owner, always an implicit roster member
UNKNOWN = "Unknown"  # sender of incoming money that matched no roster name


def with_self(roster: list[str]) -> list[str]:
    """Return the roster with the self identifier first, without duplicates."""
    return list(dict.fromkeys([SELF, *roster]))


def new_transaction_id() -> str:
    """Generate a fresh transaction id."""
    return uuid.uuid4().hex


# ============================================================================
# Transaction Models
# ============================================================================


class Direction(str, Enum):
    """Whether money left (OUTGOING) or reached (INCOMING) the device owner."""

    INCOMING = "INCOMING"
    OUTGOING = "OUTGOING"


class Transaction(BaseModel):
    """A single shared transaction, parsed from a message or entered by hand.

    The counterparty is the payer for OUTGOING transactions and the sender for
    INCOMING ones. It may also appear among its own participants (the payer
    carrying one share of a split).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_transaction_id)
    description: str
    amount: Decimal = Field(gt=0)
    direction: Direction = Direction.OUTGOING
    counterparty: str
    participants: list[str]
    timestamp_ms: int
    auto_detected: bool = False  # True = parsed from message text

    @field_validator("participants")
    @classmethod
    def _dedupe_participants(cls, value: list[str]) -> list[str]:
        participants = list(dict.fromkeys(value))
        if not participants:
            raise ValueError("participants must not be empty")
        return participants

    @model_validator(mode="after")
    def _incoming_benefits_self_only(self) -> "Transaction":
        if self.direction == Direction.INCOMING and self.participants != [SELF]:
            raise ValueError(
                f"INCOMING transactions are shared by {SELF!r} only, "
                f"got {self.participants}"
            )
        return self

    @property
    def share(self) -> Decimal:
        """Amount carried by each participant."""
        return self.amount / len(self.participants)

    def with_participants(self, participants: list[str]) -> "Transaction":
        """Return a copy with a new participants list (the only allowed edit)."""
        data = self.model_dump()
        data["participants"] = list(participants)
        return Transaction.model_validate(data)


class ParseResult(BaseModel):
    """Outcome of parsing one message."""

    transaction: Transaction | None = None
    success: bool = False
    reason: str | None = None  # why parsing failed


# ============================================================================
# Settlement Models
# ============================================================================


class Balance(BaseModel):
    """Net position of one person.

    Positive = the group owes this person, negative = this person owes the group.
    """

    model_config = ConfigDict(frozen=True)

    person: str
    amount: Decimal


class Transfer(BaseModel):
    """A payment from one person to another that settles debt."""

    model_config = ConfigDict(frozen=True)

    from_person: str = Field(serialization_alias="from")
    to_person: str = Field(serialization_alias="to")
    amount: Decimal = Field(gt=0)


# ============================================================================
# Message Models
# ============================================================================


class PaymentMessage(BaseModel):
    """A raw message as received on the device."""

    id: str = Field(default_factory=new_transaction_id)
    sender: str = ""
    body: str
    timestamp_ms: int
    processed: bool = False  # True once a transaction was parsed from it


class ScanReport(BaseModel):
    """Summary of scanning a batch of device messages."""

    scanned: int = 0
    skipped: int = 0  # not payment-like, or outside the days-back window
    transactions: list[Transaction] = Field(default_factory=list)
    unrecognized: list[PaymentMessage] = Field(default_factory=list)
