"""Counterparty and split participant detection."""

from ..models import SELF, UNKNOWN, Direction

# Phrases meaning the device owner made the payment
SELF_PAYMENT_PHRASES = [
    "debited",
    "you sent",
    "you paid",
    "your payment",
    "your account",
    "withdrawn from",
    "i paid",
    "i spent",
]

# Phrases meaning the whole group shares the payment
GROUP_PHRASES = ["all of us", "everyone", "split between all", "split equally"]

# Phrases meaning the payer takes a share too
INCLUDE_PAYER_PHRASES = ["me and", "for me and", "myself and"]


def _contains_any(text: str, phrases: list[str]) -> bool:
    return any(phrase in text for phrase in phrases)


def detect_counterparty(text: str, roster: list[str], direction: Direction) -> str:
    """
    Find who paid (OUTGOING) or who sent the money (INCOMING).

    Roster names are tried in roster order; the first match wins.
    """
    lower_text = text.lower()

    if direction == Direction.INCOMING:
        for name in roster:
            lower_name = name.lower()
            if (
                f"from {lower_name}" in lower_text
                or f"{lower_name} sent" in lower_text
                or f"{lower_name} paid" in lower_text
            ):
                return name
        return UNKNOWN

    if _contains_any(lower_text, SELF_PAYMENT_PHRASES):
        return SELF

    for name in roster:
        lower_name = name.lower()
        if f"{lower_name} paid" in lower_text or f"{lower_name} spent" in lower_text:
            return name

    return SELF


def detect_participants(
    text: str, roster: list[str], counterparty: str, direction: Direction
) -> list[str]:
    """Find who shares the transaction amount."""
    if direction == Direction.INCOMING:
        return [SELF]

    lower_text = text.lower()

    if _contains_any(lower_text, GROUP_PHRASES):
        return list(dict.fromkeys([SELF, *roster]))

    participants = [name for name in roster if name.lower() in lower_text]

    if _contains_any(lower_text, INCLUDE_PAYER_PHRASES):
        participants.append(counterparty)

    if not participants:
        participants.append(counterparty)

    return list(dict.fromkeys(participants))


def resolve_parties(
    text: str, roster: list[str], direction: Direction
) -> tuple[str, list[str]]:
    """
    Resolve the counterparty and the participants of a message.

    Args:
        text: Raw message text
        roster: Known participant names, excluding "Me"
        direction: Direction from the classifier

    Returns:
        Tuple of (counterparty, participants)
    """
    counterparty = detect_counterparty(text, roster, direction)
    participants = detect_participants(text, roster, counterparty, direction)
    return counterparty, participants
