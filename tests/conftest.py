"""Shared fixtures for PaySplit tests."""

from datetime import datetime, timezone

import pytest

from paysplit.config import Settings
from paysplit.parsing.dates import to_epoch_ms
from paysplit.service import LedgerService

# 2024-03-10 15:45:30.250 UTC
RECEIVED_AT = datetime(2024, 3, 10, 15, 45, 30, 250000, tzinfo=timezone.utc)
RECEIVED_AT_MS = to_epoch_ms(RECEIVED_AT)


@pytest.fixture
def roster():
    """A small group of friends."""
    return ["Alice", "Bob"]


@pytest.fixture
def received_at_ms():
    """Fixed message receipt time."""
    return RECEIVED_AT_MS


@pytest.fixture
def settings(roster):
    """Settings with a fixed roster and UTC dates."""
    return Settings(roster=roster, timezone="UTC")


@pytest.fixture
def service(settings):
    """A fresh in-memory ledger."""
    return LedgerService(settings)
