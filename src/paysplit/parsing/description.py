"""Human-readable labels for parsed transactions."""

import re

from ..models import Direction

_NAME_TERMINATOR = r"(?:\s+(?:Rs|INR|₹|for|on|via|using)|$)"

INCOMING_NAME_PATTERN = re.compile(
    r"(?:from|received from)\s+([A-Za-z\s]+?)" + _NAME_TERMINATOR, re.IGNORECASE
)
OUTGOING_NAME_PATTERN = re.compile(
    r"(?:to|paid to|sent to)\s+([A-Za-z\s]+?)" + _NAME_TERMINATOR, re.IGNORECASE
)

# Ordered by priority: the first row with a keyword in the text wins.
# Later rows are masked by earlier ones on purpose ("upi" is the weakest hint).
CATEGORY_TABLE: list[tuple[tuple[str, ...], str]] = [
    (("movie", "ticket"), "Movie Tickets"),
    (("dinner", "restaurant"), "Dinner"),
    (("lunch",), "Lunch"),
    (("breakfast",), "Breakfast"),
    (("coffee", "cafe"), "Coffee"),
    (("grocery", "groceries"), "Groceries"),
    (("uber", "ola", "taxi", "cab"), "Transportation"),
    (("swiggy", "zomato"), "Food Delivery"),
    (("amazon",), "Shopping"),
    (("flipkart",), "Shopping"),
    (("gas", "petrol", "fuel"), "Fuel"),
    (("rent",), "Rent"),
    (("electricity", "water", "utilities"), "Utilities"),
    (("internet", "wifi", "broadband"), "Internet"),
    (("pizza",), "Pizza"),
    (("drinks", "bar"), "Drinks"),
    (("hotel",), "Hotel"),
    (("flight", "airline"), "Flight"),
    (("medicine", "pharmacy"), "Medicine"),
    (("recharge",), "Recharge"),
    (("cashback",), "Cashback"),
    (("refund",), "Refund"),
    (("salary",), "Salary"),
]

INCOMING_PREFIX = "Received: "


def extract_counterparty_label(text: str, direction: Direction) -> str | None:
    """Build "Paid to X" / "Received from X" from a to/from phrase, if any."""
    pattern = (
        INCOMING_NAME_PATTERN
        if direction == Direction.INCOMING
        else OUTGOING_NAME_PATTERN
    )
    match = pattern.search(text)
    if not match:
        return None

    name = match.group(1).strip()
    if len(name) <= 2 or "account" in name.lower():
        return None

    if direction == Direction.INCOMING:
        return f"Received from {name}"
    return f"Paid to {name}"


def categorize(text: str, direction: Direction) -> str:
    """Label a message from the category keyword table."""
    lower_text = text.lower()
    incoming = direction == Direction.INCOMING

    for keywords, label in CATEGORY_TABLE:
        if any(keyword in lower_text for keyword in keywords):
            return f"{INCOMING_PREFIX}{label}" if incoming else label

    if "upi" in lower_text:
        return "UPI Received" if incoming else "UPI Payment"

    return "Money Received" if incoming else "Payment"


def extract_description(text: str, direction: Direction) -> str:
    """
    Derive a short description for a message.

    Args:
        text: Raw message text
        direction: Direction from the classifier

    Returns:
        A counterparty-based label, else a category label
    """
    return extract_counterparty_label(text, direction) or categorize(text, direction)
