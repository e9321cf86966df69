# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Derived per-user counters used for gamification.

The counters are not authoritative: they can be recomputed from the goal and
expense history. They change only as a side effect of recording an expense
or completing a goal, through the module-level hooks below.
"""

from __future__ import annotations

from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.types import UserStats


def _load(storage: LedgerStorage, principal: str) -> UserStats:
    stats = storage.get_stats(principal)
    return stats if stats is not None else UserStats(principal=principal)


def touch_activity(storage: LedgerStorage, principal: str, tick: int) -> None:
    """Set the principal's last activity tick."""
    stats = _load(storage, principal)
    stats.last_activity_tick = tick
    storage.save_stats(stats)


def record_goal_completion(
    storage: LedgerStorage,
    principal: str,
    target_amount: int,
    tick: int,
) -> None:
    """Count one achieved goal and add its target to the amount saved."""
    stats = _load(storage, principal)
    stats.goals_achieved += 1
    stats.total_saved += target_amount
    stats.last_activity_tick = tick
    storage.save_stats(stats)


class StatsAggregator:
    """Read-only view of per-user stats."""

    def __init__(self, storage: LedgerStorage) -> None:
        self._storage = storage

    def get_stats(self, principal: str) -> UserStats:
        """Return the principal's stats; all counters are 0 when unknown."""
        return _load(self._storage, principal)
