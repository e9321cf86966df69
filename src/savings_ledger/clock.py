# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Clock contract and period derivation.

The host environment owns time: it supplies a strictly increasing integer
tick (block height, sequence number, ...). The ledger only reads it and maps
it onto fixed-width (month, year) windows.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from savings_ledger.config import PeriodConfig
from savings_ledger.types import Period


@runtime_checkable
class Clock(Protocol):
    """Source of the current tick."""

    def now(self) -> int:
        ...


class ManualClock:
    """
    Clock advanced explicitly by the caller.

    Suitable for hosts that drive the ledger from their own sequencer, and
    for tests.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be >= 0; got {start}.")
        self._tick = start

    def now(self) -> int:
        return self._tick

    def advance(self, ticks: int = 1) -> int:
        """Move the clock forward by ``ticks`` and return the new tick."""
        if ticks <= 0:
            raise ValueError(f"ticks must be positive; got {ticks}.")
        self._tick += ticks
        return self._tick


def period_for_tick(tick: int, config: PeriodConfig) -> Period:
    """
    Derive the (month, year) window containing ``tick``.

    Months are ``ticks_per_month`` wide; every 12 months the year advances.

    Raises:
        ValueError: If ``tick`` lies before the configured epoch.
    """
    elapsed = tick - config.epoch_tick
    if elapsed < 0:
        raise ValueError(
            f"tick {tick} is before the configured epoch tick {config.epoch_tick}."
        )
    months_elapsed = elapsed // config.ticks_per_month
    return Period(
        month=months_elapsed % 12 + 1,
        year=config.epoch_year + months_elapsed // 12,
    )


def ticks_for_months(months: int, config: PeriodConfig) -> int:
    """Return the number of ticks spanned by ``months`` whole months."""
    return months * config.ticks_per_month
