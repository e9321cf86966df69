# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from enum import IntEnum
from typing import Literal, Optional

from pydantic import BaseModel, Field

# ─── Categories ───────────────────────────────────────────────────────────────


class Category(IntEnum):
    """
    Expense categories.

    The integer codes are part of the public contract and must not be
    renumbered.
    """

    FOOD = 1
    TRANSPORT = 2
    ENTERTAINMENT = 3
    UTILITIES = 4
    HEALTHCARE = 5
    SHOPPING = 6
    OTHER = 7

    def label(self) -> str:
        """Return a human-readable label for this category."""
        return self.name.capitalize()


CATEGORY_CODES = frozenset(int(category) for category in Category)

# ─── Period ───────────────────────────────────────────────────────────────────


class Period(BaseModel, frozen=True):
    """A budgeting window derived from the clock."""

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1)


# ─── Budget ───────────────────────────────────────────────────────────────────


def _zero_per_category() -> dict[Category, int]:
    return {category: 0 for category in Category}


class BudgetRecord(BaseModel):
    """
    Spending plan for one (owner, month, year).

    ``limits`` and ``spent`` are keyed by Category. ``total_spent`` always
    equals ``sum(spent.values())`` and never exceeds ``total_budget``.
    """

    owner: str
    month: int
    year: int
    total_budget: int
    total_spent: int = 0
    limits: dict[Category, int] = Field(default_factory=_zero_per_category)
    spent: dict[Category, int] = Field(default_factory=_zero_per_category)
    created_at: int
    is_active: bool = True

    @property
    def period(self) -> Period:
        return Period(month=self.month, year=self.year)

    @property
    def remaining(self) -> int:
        return self.total_budget - self.total_spent


class CategoryUtilization(BaseModel):
    """Point-in-time figures for one category of a budget."""

    category: Category
    limit: int
    spent: int
    available: int


class BudgetUtilization(BaseModel):
    """Point-in-time utilization snapshot for one budget."""

    owner: str
    month: int
    year: int
    total_budget: int
    total_spent: int
    available: int
    utilization_percent: float
    categories: list[CategoryUtilization]


# ─── Expense ──────────────────────────────────────────────────────────────────


class ExpenseRecord(BaseModel, frozen=True):
    """An immutable journal entry for a single spend event."""

    id: int
    user: str
    amount: int
    category: Category
    description: str
    recorded_at: int
    month: int
    year: int


class ExpenseFilter(BaseModel):
    """Optional filter applied to expense queries. All fields are AND-ed."""

    user: Optional[str] = None
    category: Optional[Category] = None
    month: Optional[int] = None
    year: Optional[int] = None
    min_amount: Optional[int] = None
    max_amount: Optional[int] = None


# ─── Goal ─────────────────────────────────────────────────────────────────────

GoalStatus = Literal["open", "contributing", "completed", "rewarded", "expired"]


class GoalRecord(BaseModel):
    """A savings target owned by one principal."""

    id: int
    owner: str
    title: str
    target_amount: int
    current_amount: int = 0
    deadline_tick: int
    created_at: int
    is_completed: bool = False
    reward_claimed: bool = False

    def status(self, now: int) -> GoalStatus:
        """Derive the lifecycle state of the goal at tick ``now``."""
        if self.reward_claimed:
            return "rewarded"
        if self.is_completed:
            return "completed"
        if now > self.deadline_tick:
            return "expired"
        if self.current_amount == 0:
            return "open"
        return "contributing"


class ContributionResult(BaseModel, frozen=True):
    """Outcome of a successful goal contribution."""

    goal_id: int
    amount: int
    current_amount: int
    target_amount: int
    completed: bool


# ─── Stats ────────────────────────────────────────────────────────────────────


class UserStats(BaseModel):
    """Denormalised gamification counters for one principal."""

    principal: str
    goals_achieved: int = 0
    total_saved: int = 0
    last_activity_tick: int = 0
