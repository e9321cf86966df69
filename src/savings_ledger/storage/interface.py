# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from savings_ledger.types import BudgetRecord, ExpenseRecord, GoalRecord, UserStats

logger = logging.getLogger("savings_ledger.storage")


class LedgerStorage(ABC):
    """
    Persistence contract for the ledger state.

    Implementors may back this with SQLite, Postgres, or any transactional
    key-value store. The default MemoryStorage is suitable for single-process
    use and testing only; state is lost when the process exits.

    Every public ledger operation runs inside ``atomic()``: either all of its
    writes are committed or none are.
    """

    # ─── Transactions ─────────────────────────────────────────────────────────

    @abstractmethod
    def begin(self) -> None:
        ...

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run the enclosed block as one all-or-nothing transition."""
        self.begin()
        try:
            yield
        except BaseException as exc:
            self.rollback()
            logger.debug(
                "ledger_transition_rolled_back",
                extra={"error_code": getattr(exc, "code", type(exc).__name__)},
            )
            raise
        self.commit()

    # ─── Balances ─────────────────────────────────────────────────────────────

    @abstractmethod
    def get_balance(self, principal: str) -> int:
        ...

    @abstractmethod
    def set_balance(self, principal: str, amount: int) -> None:
        ...

    @abstractmethod
    def list_balances(self) -> dict[str, int]:
        ...

    # ─── Budgets ──────────────────────────────────────────────────────────────

    @abstractmethod
    def get_budget(self, owner: str, month: int, year: int) -> BudgetRecord | None:
        ...

    @abstractmethod
    def save_budget(self, budget: BudgetRecord) -> None:
        ...

    @abstractmethod
    def list_budgets(self, owner: str) -> list[BudgetRecord]:
        ...

    # ─── Expenses ─────────────────────────────────────────────────────────────

    @abstractmethod
    def next_expense_id(self) -> int:
        """Allocate the next expense identifier (first id is 1)."""
        ...

    @abstractmethod
    def save_expense(self, expense: ExpenseRecord) -> None:
        ...

    @abstractmethod
    def get_expense(self, expense_id: int) -> ExpenseRecord | None:
        ...

    @abstractmethod
    def list_expenses(self) -> list[ExpenseRecord]:
        ...

    # ─── Goals ────────────────────────────────────────────────────────────────

    @abstractmethod
    def next_goal_id(self) -> int:
        """Allocate the next goal identifier (first id is 1)."""
        ...

    @abstractmethod
    def save_goal(self, goal: GoalRecord) -> None:
        ...

    @abstractmethod
    def get_goal(self, goal_id: int) -> GoalRecord | None:
        ...

    @abstractmethod
    def list_goals(self) -> list[GoalRecord]:
        ...

    # ─── Reward pool ──────────────────────────────────────────────────────────

    @abstractmethod
    def get_reward_pool(self) -> int:
        ...

    @abstractmethod
    def set_reward_pool(self, amount: int) -> None:
        ...

    # ─── Stats ────────────────────────────────────────────────────────────────

    @abstractmethod
    def get_stats(self, principal: str) -> UserStats | None:
        ...

    @abstractmethod
    def save_stats(self, stats: UserStats) -> None:
        ...
