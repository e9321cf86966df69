# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for savings-ledger tests."""

from __future__ import annotations

import pytest

from savings_ledger.clock import ManualClock
from savings_ledger.config import LedgerConfig, PeriodConfig
from savings_ledger.custody import MemoryCustody
from savings_ledger.ledger import SavingsLedger

ADMIN = "treasury"
ALICE = "alice"
BOB = "bob"


@pytest.fixture
def config() -> LedgerConfig:
    """Default protocol constants with short 100-tick months."""
    return LedgerConfig(admin=ADMIN, periods=PeriodConfig(ticks_per_month=100))


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def custody() -> MemoryCustody:
    """Custody with external wallets seeded for the test principals."""
    custody = MemoryCustody()
    custody.mint(ALICE, 50_000)
    custody.mint(BOB, 50_000)
    custody.mint(ADMIN, 50_000)
    return custody


@pytest.fixture
def ledger(config: LedgerConfig, clock: ManualClock, custody: MemoryCustody) -> SavingsLedger:
    """A freshly initialised ledger with no deposits."""
    return SavingsLedger(config, clock=clock, custody=custody)


@pytest.fixture
def funded_ledger(ledger: SavingsLedger) -> SavingsLedger:
    """A ledger where alice has deposited 10,000."""
    ledger.balances.deposit(ALICE, 10_000)
    return ledger
