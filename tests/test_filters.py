"""Tests for the payment message filter."""

import pytest

from paysplit.parsing.filters import has_amount_hint, is_payment_message, is_payment_sender


class TestIsPaymentMessage:
    """Sender, keyword and amount must all be present."""

    def test_bank_debit(self):
        assert is_payment_message("VM-HDFCBK", "Rs 500 debited from A/c XX1234")

    def test_wallet_payment(self):
        assert is_payment_message("AD-PAYTM", "You paid Rs 120 to Chai Point")

    def test_unknown_sender(self):
        assert not is_payment_message("+919876543210", "I paid Rs 500 for dinner")

    def test_no_payment_keyword(self):
        assert not is_payment_message("AD-PAYTM", "Your KYC is pending, Rs 0 fee")

    def test_no_amount(self):
        assert not is_payment_message("JD-ICICIB", "Payment reminder for your card")


@pytest.mark.parametrize(
    "sender, expected",
    [("vm-sbiinb", True), ("BX-KOTAKB", True), ("FRIEND", False)],
)
def test_is_payment_sender(sender, expected):
    assert is_payment_sender(sender) is expected


def test_amount_hint_accepts_bare_numbers():
    assert has_amount_hint("debited 500")
    assert not has_amount_hint("hello there")
