# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from savings_ledger.balances import BalanceLedger
from savings_ledger.budgets import BudgetEngine
from savings_ledger.clock import Clock, ManualClock
from savings_ledger.config import LedgerConfig
from savings_ledger.custody import CustodyTransfer, MemoryCustody
from savings_ledger.events import EventLog
from savings_ledger.expenses import ExpenseJournal
from savings_ledger.goals import GoalEngine
from savings_ledger.rewards import RewardPool
from savings_ledger.stats import StatsAggregator
from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.storage.memory import MemoryStorage
from savings_ledger.types import Period


class SavingsLedger:
    """
    Composes the balance ledger, budget engine, expense journal, goal engine,
    reward pool and stats aggregator over one shared storage.

    Every mutating operation is a single atomic transition on that storage:
    it either commits all of its writes or none of them. Operations are
    expected to be called one at a time, in the order the host sequences
    them; the ledger adds no locking of its own.

    The budget engine and goal engine never call each other. They are
    coordinated only by the caller's sequence of operations.

    Example::

        ledger = SavingsLedger(LedgerConfig(admin="treasury"))
        ledger.custody.mint("alice", 10_000)

        ledger.balances.deposit("alice", 10_000)
        ledger.budgets.create_budget(
            "alice", 10_000, [3000, 2000, 1000, 1000, 1000, 1000, 1000]
        )
        ledger.expenses.add_expense("alice", 500, Category.FOOD, "groceries")

        goal_id = ledger.goals.create_goal("alice", "Laptop", 5_000, deadline_months=3)
        ledger.goals.contribute("alice", goal_id, 5_000)
    """

    def __init__(
        self,
        config: LedgerConfig,
        *,
        clock: Clock | None = None,
        custody: CustodyTransfer | None = None,
        storage: LedgerStorage | None = None,
    ) -> None:
        self.config = config
        self.clock: Clock = clock if clock is not None else ManualClock()
        self.custody: CustodyTransfer = custody if custody is not None else MemoryCustody()
        self._storage: LedgerStorage = storage if storage is not None else MemoryStorage()

        self.events = EventLog(config.events)
        self.balances = BalanceLedger(self._storage, self.custody, self.clock, self.events)
        self.budgets = BudgetEngine(self._storage, self.clock, config, self.events)
        self.expenses = ExpenseJournal(self._storage, self.clock, config, self.events)
        self.goals = GoalEngine(self._storage, self.clock, config, self.events)
        self.rewards = RewardPool(self._storage, self.custody, self.clock, config, self.events)
        self.stats = StatsAggregator(self._storage)

    def current_period(self) -> Period:
        """Return the (month, year) window of the current tick."""
        return self.budgets.current_period()

    def total_liabilities(self) -> int:
        """
        Return the value the ledger owes out of custody: all available
        balances, the reward pool, and everything saved into goals.
        """
        balances = sum(self._storage.list_balances().values())
        saved = sum(goal.current_amount for goal in self._storage.list_goals())
        return balances + self._storage.get_reward_pool() + saved

    def verify_conservation(self) -> bool:
        """Return True when custody covers every liability of the ledger."""
        return self.total_liabilities() <= self.custody.custody_balance()
