"""Group balances and greedy settle-up plans."""

import logging
from decimal import Decimal

from .exceptions import SettlementError
from .models import SELF, Balance, Transaction, Transfer

logger = logging.getLogger(__name__)

TOLERANCE = Decimal("0.01")  # balances closer to zero than this count as settled


def compute_balances(
    transactions: list[Transaction], roster: list[str]
) -> list[Balance]:
    """
    Compute every person's net balance.

    Steps:
    1. Start everyone on the roster (plus "Me") at zero
    2. Credit each transaction's counterparty with the full amount
    3. Debit each participant an equal share

    Names outside the roster are added on first touch.

    Args:
        transactions: All transactions of the group
        roster: Known participant names, excluding "Me"

    Returns:
        Balances sorted by descending amount (ties keep roster order)
    """
    table: dict[str, Decimal] = {name: Decimal("0") for name in roster}
    table.setdefault(SELF, Decimal("0"))

    for transaction in transactions:
        share = transaction.share

        table[transaction.counterparty] = (
            table.get(transaction.counterparty, Decimal("0")) + transaction.amount
        )
        for person in transaction.participants:
            table[person] = table.get(person, Decimal("0")) - share

    balances = [Balance(person=person, amount=amount) for person, amount in table.items()]
    return sorted(balances, key=lambda balance: balance.amount, reverse=True)


def _select_creditor(table: dict[str, Decimal]) -> tuple[str, Decimal]:
    """Largest balance; ties go to the alphabetically first name."""
    return min(table.items(), key=lambda item: (-item[1], item[0]))


def _select_debtor(table: dict[str, Decimal]) -> tuple[str, Decimal]:
    """Smallest balance; ties go to the alphabetically first name."""
    return min(table.items(), key=lambda item: (item[1], item[0]))


def compute_settlements(
    balances: list[Balance], tolerance: Decimal = TOLERANCE
) -> list[Transfer]:
    """
    Compute a greedy settle-up plan.

    Repeatedly pays the largest debt towards the largest credit until every
    balance is within tolerance of zero. Each step zeroes at least one person,
    so N non-zero balances need at most N-1 transfers.

    Args:
        balances: Net balances, normally from compute_balances
        tolerance: Balances smaller than this are treated as settled

    Returns:
        Transfers in the order they should be made
    """
    table: dict[str, Decimal] = {}
    for balance in balances:
        table[balance.person] = table.get(balance.person, Decimal("0")) + balance.amount

    residual = sum(table.values(), Decimal("0"))
    if abs(residual) > tolerance:
        logger.warning(
            f"Balances do not sum to zero (residual {residual}); "
            f"the plan will leave that amount unsettled"
        )

    transfers: list[Transfer] = []

    while any(abs(amount) > tolerance for amount in table.values()):
        creditor, credit = _select_creditor(table)
        debtor, debt = _select_debtor(table)

        if abs(credit) < tolerance or abs(debt) < tolerance:
            break

        amount = min(credit, -debt)
        if amount <= 0:
            break

        transfers.append(Transfer(from_person=debtor, to_person=creditor, amount=amount))
        table[creditor] = credit - amount
        table[debtor] = debt + amount

        logger.debug(f"Settle: {debtor} pays {creditor} {amount}")

    return transfers


def apply_transfers(
    balances: list[Balance], transfers: list[Transfer]
) -> list[Balance]:
    """
    Apply transfers to balances (payer goes up, payee goes down).

    Args:
        balances: Net balances before settling
        transfers: Transfers to apply, in order

    Returns:
        Balances after the transfers, in the input order

    Raises:
        SettlementError: If a transfer names someone without a balance
    """
    table = {balance.person: balance.amount for balance in balances}

    for transfer in transfers:
        for person in (transfer.from_person, transfer.to_person):
            if person not in table:
                raise SettlementError(f"Transfer names unknown person: {person}")
        table[transfer.from_person] += transfer.amount
        table[transfer.to_person] -= transfer.amount

    return [Balance(person=person, amount=amount) for person, amount in table.items()]
