"""Tests for domain model invariants."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from paysplit.models import SELF, Direction, Transaction, Transfer, with_self


def make_transaction(**overrides) -> Transaction:
    """Create a valid outgoing transaction, with optional overrides."""
    data = {
        "description": "Dinner",
        "amount": Decimal("90"),
        "counterparty": SELF,
        "participants": [SELF, "Alice", "Bob"],
        "timestamp_ms": 1_700_000_000_000,
    }
    data.update(overrides)
    return Transaction(**data)


class TestTransactionInvariants:
    """Validation of transaction fields."""

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            make_transaction(amount=amount)

    def test_participants_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            make_transaction(participants=[])

    def test_participants_are_deduplicated(self):
        transaction = make_transaction(participants=["Alice", SELF, "Alice"])
        assert transaction.participants == ["Alice", SELF]

    def test_incoming_is_shared_by_me_only(self):
        with pytest.raises(ValidationError):
            make_transaction(direction=Direction.INCOMING, participants=[SELF, "Alice"])

    def test_incoming_with_me(self):
        transaction = make_transaction(direction=Direction.INCOMING, participants=[SELF])
        assert transaction.participants == [SELF]

    def test_defaults(self):
        transaction = make_transaction()
        assert transaction.direction == Direction.OUTGOING
        assert transaction.auto_detected is False
        assert len(transaction.id) == 32

    def test_immutable(self):
        transaction = make_transaction()
        with pytest.raises(ValidationError):
            transaction.amount = Decimal("1")

    def test_share(self):
        assert make_transaction().share == Decimal("30")


class TestWithParticipants:
    """The participants edit is the only allowed change."""

    def test_keeps_other_fields(self):
        original = make_transaction(auto_detected=True)
        edited = original.with_participants(["Alice"])

        assert edited.participants == ["Alice"]
        assert edited.model_dump(exclude={"participants"}) == original.model_dump(
            exclude={"participants"}
        )
        assert original.participants == [SELF, "Alice", "Bob"]

    def test_revalidates(self):
        with pytest.raises(ValidationError):
            make_transaction().with_participants([])


class TestTransfer:
    """Transfer serialization."""

    def test_serializes_with_from_and_to(self):
        transfer = Transfer(from_person="Bob", to_person="Alice", amount=Decimal("60"))
        assert transfer.model_dump(by_alias=True) == {
            "from": "Bob",
            "to": "Alice",
            "amount": Decimal("60"),
        }

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            Transfer(from_person="Bob", to_person="Alice", amount=Decimal("0"))


def test_with_self_puts_me_first_once():
    assert with_self(["Alice", SELF, "Bob"]) == [SELF, "Alice", "Bob"]
