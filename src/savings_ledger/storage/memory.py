# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from dataclasses import dataclass, field, replace

from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.types import BudgetRecord, ExpenseRecord, GoalRecord, UserStats


@dataclass
class _State:
    balances: dict[str, int] = field(default_factory=dict)
    budgets: dict[tuple[str, int, int], BudgetRecord] = field(default_factory=dict)
    expenses: dict[int, ExpenseRecord] = field(default_factory=dict)
    goals: dict[int, GoalRecord] = field(default_factory=dict)
    stats: dict[str, UserStats] = field(default_factory=dict)
    expense_counter: int = 0
    goal_counter: int = 0
    reward_pool: int = 0

    def snapshot(self) -> _State:
        # Stored records are never mutated in place, so shallow dict copies
        # are enough to restore the previous state.
        return replace(
            self,
            balances=dict(self.balances),
            budgets=dict(self.budgets),
            expenses=dict(self.expenses),
            goals=dict(self.goals),
            stats=dict(self.stats),
        )


class MemoryStorage(LedgerStorage):
    """
    In-process memory store, suitable for single-process ledgers and testing.

    All state is lost when the process exits. Records are copied on the way
    in and on the way out, so callers cannot mutate stored state directly.
    Transactions nest: each ``begin()`` pushes a snapshot that the matching
    ``rollback()`` restores.
    """

    def __init__(self) -> None:
        self._state = _State()
        self._snapshots: list[_State] = []

    # ─── Transactions ─────────────────────────────────────────────────────────

    def begin(self) -> None:
        self._snapshots.append(self._state.snapshot())

    def commit(self) -> None:
        if not self._snapshots:
            raise RuntimeError("commit() called without an open transaction.")
        self._snapshots.pop()

    def rollback(self) -> None:
        if not self._snapshots:
            raise RuntimeError("rollback() called without an open transaction.")
        self._state = self._snapshots.pop()

    @property
    def in_transaction(self) -> bool:
        return bool(self._snapshots)

    # ─── Balances ─────────────────────────────────────────────────────────────

    def get_balance(self, principal: str) -> int:
        return self._state.balances.get(principal, 0)

    def set_balance(self, principal: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"balance of '{principal}' cannot be negative: {amount}")
        self._state.balances[principal] = amount

    def list_balances(self) -> dict[str, int]:
        return dict(self._state.balances)

    # ─── Budgets ──────────────────────────────────────────────────────────────

    def get_budget(self, owner: str, month: int, year: int) -> BudgetRecord | None:
        budget = self._state.budgets.get((owner, month, year))
        return budget.model_copy(deep=True) if budget is not None else None

    def save_budget(self, budget: BudgetRecord) -> None:
        key = (budget.owner, budget.month, budget.year)
        self._state.budgets[key] = budget.model_copy(deep=True)

    def list_budgets(self, owner: str) -> list[BudgetRecord]:
        return [
            budget.model_copy(deep=True)
            for (budget_owner, _, _), budget in self._state.budgets.items()
            if budget_owner == owner
        ]

    # ─── Expenses ─────────────────────────────────────────────────────────────

    def next_expense_id(self) -> int:
        self._state.expense_counter += 1
        return self._state.expense_counter

    def save_expense(self, expense: ExpenseRecord) -> None:
        if expense.id in self._state.expenses:
            raise ValueError(f"expense {expense.id} is already recorded")
        self._state.expenses[expense.id] = expense

    def get_expense(self, expense_id: int) -> ExpenseRecord | None:
        return self._state.expenses.get(expense_id)

    def list_expenses(self) -> list[ExpenseRecord]:
        return list(self._state.expenses.values())

    # ─── Goals ────────────────────────────────────────────────────────────────

    def next_goal_id(self) -> int:
        self._state.goal_counter += 1
        return self._state.goal_counter

    def save_goal(self, goal: GoalRecord) -> None:
        self._state.goals[goal.id] = goal.model_copy(deep=True)

    def get_goal(self, goal_id: int) -> GoalRecord | None:
        goal = self._state.goals.get(goal_id)
        return goal.model_copy(deep=True) if goal is not None else None

    def list_goals(self) -> list[GoalRecord]:
        return [goal.model_copy(deep=True) for goal in self._state.goals.values()]

    # ─── Reward pool ──────────────────────────────────────────────────────────

    def get_reward_pool(self) -> int:
        return self._state.reward_pool

    def set_reward_pool(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"reward pool cannot be negative: {amount}")
        self._state.reward_pool = amount

    # ─── Stats ────────────────────────────────────────────────────────────────

    def get_stats(self, principal: str) -> UserStats | None:
        stats = self._state.stats.get(principal)
        return stats.model_copy() if stats is not None else None

    def save_stats(self, stats: UserStats) -> None:
        self._state.stats[stats.principal] = stats.model_copy()
