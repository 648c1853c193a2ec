"""Heuristics for picking payment notifications out of a device inbox."""

import re

PAYMENT_KEYWORDS = [
    "paid",
    "debited",
    "spent",
    "sent",
    "transferred",
    "upi",
    "transaction",
    "payment",
]

# Wallet and bank sender ids, matched as substrings of the sender address
PAYMENT_SENDERS = [
    "PHONEPE",
    "PAYTM",
    "GPAY",
    "GOOGLEPAY",
    "AMAZONPAY",
    "BHIM",
    "SBI",
    "HDFC",
    "ICICI",
    "AXIS",
    "KOTAK",
    "MOBIKWIK",
    "FREECHARGE",
    "WHATSAPP",
    "BHARATPE",
]

_ANY_NUMBER = re.compile(r"\d+(\.\d{1,2})?")


def is_payment_sender(sender: str) -> bool:
    """Check whether a sender address belongs to a known wallet or bank."""
    upper_sender = sender.upper()
    return any(known in upper_sender for known in PAYMENT_SENDERS)


def has_amount_hint(body: str) -> bool:
    """Check for a currency marker or any number in the body."""
    lower_body = body.lower()
    return (
        "rs" in lower_body
        or "inr" in lower_body
        or "₹" in lower_body
        or _ANY_NUMBER.search(body) is not None
    )


def is_payment_message(sender: str, body: str) -> bool:
    """
    Decide whether a device message looks like a payment notification.

    Requires a known sender, a payment keyword and an amount hint.

    Args:
        sender: Sender address (short code or phone number)
        body: Message text

    Returns:
        True if the message should be handed to the parser
    """
    lower_body = body.lower()
    has_keyword = any(keyword in lower_body for keyword in PAYMENT_KEYWORDS)
    return is_payment_sender(sender) and has_keyword and has_amount_hint(body)
