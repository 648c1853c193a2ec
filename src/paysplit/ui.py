"""Interactive UI components for reviewing split participants."""

import logging
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .models import Direction, Transaction, with_self

logger = logging.getLogger(__name__)


def letters_in_order(query: str, name: str) -> bool:
    """Check that the letters of ``query`` appear in ``name`` in the same order."""
    remaining = iter(name)
    return all(letter in remaining for letter in query)


class ParticipantCompleter(Completer):
    """Fuzzy search completer for roster names in a comma-separated list."""

    def __init__(self, names: list[str]):
        """Initialize the completer with the selectable names."""
        self.names = names

    def get_completions(self, document: Document, complete_event: Any):
        """Complete the name currently being typed (after the last comma)."""
        current = document.text_before_cursor.split(",")[-1].lstrip()
        query = current.lower()

        for name in self.names:
            if letters_in_order(query, name.lower()):
                yield Completion(
                    text=name,
                    start_position=-len(current),
                    display=name,
                )


def parse_participant_input(raw: str, names: list[str]) -> list[str] | None:
    """
    Turn "alice, Bob" into canonical roster names.

    Returns:
        The names in input order, or None if any name is not selectable
    """
    by_lower = {name.lower(): name for name in names}
    selected = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        name = by_lower.get(token.lower())
        if name is None:
            return None
        selected.append(name)
    return list(dict.fromkeys(selected)) or None


def review_participants_interactive(
    transaction: Transaction, roster: list[str]
) -> list[str] | None:
    """
    Let the user edit who shares a transaction.

    Args:
        transaction: The transaction under review
        roster: Known participant names, excluding "Me"

    Returns:
        New participants, or None to keep the current ones
    """
    if transaction.direction == Direction.INCOMING:
        # Incoming money is never split
        return None

    names = with_self(roster)
    current = ", ".join(transaction.participants)

    print(f"\n📝 {transaction.description} ({transaction.amount})")
    print(f"   Paid by: {transaction.counterparty}")
    print("   Type names separated by commas, Enter to keep, Ctrl+C to skip\n")

    completer = ParticipantCompleter(names)
    session: PromptSession[str] = PromptSession(completer=completer)

    try:
        default_text = current

        while True:
            result = session.prompt(
                "Split between: ",
                default=default_text,
                complete_while_typing=True,
            )

            if not result.strip() or result.strip() == current:
                return None

            participants = parse_participant_input(result, names)
            if participants:
                logger.info(f"User set participants: {', '.join(participants)}")
                return participants

            print("❌ Unknown name. Please pick names from the roster (Tab completes).")
            default_text = result

    except KeyboardInterrupt:
        print("\n⏭️  Skipped")
        return None
    except EOFError:
        return None


def confirm_participants(transaction: Transaction) -> bool:
    """
    Simple yes/no confirmation for a detected split.

    Returns:
        True if confirmed, False otherwise
    """
    print(f"\n📝 {transaction.description} ({transaction.amount})")
    print(f"   → {transaction.counterparty} paid, split: {', '.join(transaction.participants)}")

    response = input("   Confirm? [Y/n] ").strip().lower()

    return response in ("", "y", "yes")
