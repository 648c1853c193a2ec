"""Tests for transaction descriptions."""

import pytest

from paysplit.models import Direction
from paysplit.parsing.description import extract_description


class TestCounterpartyLabel:
    """Labels built from to/from phrases."""

    def test_received_from_name(self):
        text = "Received ₹200 from Alice"
        assert extract_description(text, Direction.INCOMING) == "Received from Alice"

    def test_paid_to_merchant(self):
        text = "Rs 500 paid to Swiggy via UPI"
        assert extract_description(text, Direction.OUTGOING) == "Paid to Swiggy"

    def test_account_names_are_ignored(self):
        text = "Rs 500 transferred to savings account on 12-05-2024"
        assert extract_description(text, Direction.OUTGOING) == "Payment"

    def test_short_names_are_ignored(self):
        assert extract_description("Rs 20 sent to Al", Direction.OUTGOING) == "Payment"


class TestCategoryTable:
    """Keyword table lookups."""

    def test_pizza(self):
        text = "Paid ₹50 for pizza for everyone"
        assert extract_description(text, Direction.OUTGOING) == "Pizza"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Rs 450 for movie night", "Movie Tickets"),
            ("Rs 120 coffee", "Coffee"),
            ("Rs 300 uber ride", "Transportation"),
            ("Rs 999 flipkart order", "Shopping"),
            ("Rs 1200 electricity bill", "Utilities"),
        ],
    )
    def test_outgoing_categories(self, text, expected):
        assert extract_description(text, Direction.OUTGOING) == expected

    def test_table_order_is_priority(self):
        """Dinner comes before Drinks in the table."""
        text = "Rs 800 for dinner and drinks"
        assert extract_description(text, Direction.OUTGOING) == "Dinner"

    def test_incoming_categories_are_prefixed(self):
        text = "Cashback of Rs 25 credited"
        assert extract_description(text, Direction.INCOMING) == "Received: Cashback"


class TestFallbacks:
    """UPI and no-match labels already encode direction."""

    def test_upi_incoming(self):
        text = "Rs 100 received via UPI"
        assert extract_description(text, Direction.INCOMING) == "UPI Received"

    def test_upi_outgoing(self):
        text = "Rs 100 debited via UPI"
        assert extract_description(text, Direction.OUTGOING) == "UPI Payment"

    def test_no_match_incoming(self):
        assert extract_description("Rs 75 credited", Direction.INCOMING) == "Money Received"

    def test_no_match_outgoing(self):
        assert extract_description("Rs 75 debited", Direction.OUTGOING) == "Payment"
