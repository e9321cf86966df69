# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging
from collections.abc import Sequence

from savings_ledger.clock import Clock, period_for_tick
from savings_ledger.config import LedgerConfig
from savings_ledger.errors import (
    AlreadyExistsError,
    BudgetExceededError,
    InvalidInputError,
    NotFoundError,
)
from savings_ledger.events import EventLog
from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.types import (
    BudgetRecord,
    BudgetUtilization,
    Category,
    CategoryUtilization,
    Period,
)
from savings_ledger.validation import validate_amount, validate_principal

logger = logging.getLogger("savings_ledger.budgets")


def charge_budget(budget: BudgetRecord, category: Category, amount: int) -> BudgetRecord:
    """
    Apply an expense to ``budget`` in place and return it.

    ``spent[category]`` and ``total_spent`` move together. Only the budget
    total is enforced; category limits are reported, not enforced.

    Raises:
        BudgetExceededError: If the expense would push ``total_spent`` past
            ``total_budget``. The budget is left untouched.
    """
    new_total_spent = budget.total_spent + amount
    if new_total_spent > budget.total_budget:
        raise BudgetExceededError(
            owner=budget.owner, requested=amount, available=budget.remaining
        )
    budget.spent[category] += amount
    budget.total_spent = new_total_spent
    return budget


def build_utilization(budget: BudgetRecord) -> BudgetUtilization:
    """Derive a BudgetUtilization snapshot from a stored budget."""
    categories = [
        CategoryUtilization(
            category=category,
            limit=budget.limits[category],
            spent=budget.spent[category],
            available=max(0, budget.limits[category] - budget.spent[category]),
        )
        for category in Category
    ]
    if budget.total_budget == 0:
        percent = 100.0
    else:
        percent = budget.total_spent / budget.total_budget * 100.0
    return BudgetUtilization(
        owner=budget.owner,
        month=budget.month,
        year=budget.year,
        total_budget=budget.total_budget,
        total_spent=budget.total_spent,
        available=budget.remaining,
        utilization_percent=percent,
        categories=categories,
    )


class BudgetEngine:
    """
    Monthly spending plans, one per (principal, month, year).

    A budget is created once per period and is never reopened or deleted.
    Its spend counters change only when the ExpenseJournal records an
    expense against the same owner and period.

    Example::

        engine.create_budget("alice", 10_000, [3000, 2000, 1000, 1000, 1000, 1000, 1000])
        engine.utilization("alice", month=1, year=2024).available  # 10000
    """

    def __init__(
        self,
        storage: LedgerStorage,
        clock: Clock,
        config: LedgerConfig,
        events: EventLog,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._config = config
        self._events = events

    def current_period(self) -> Period:
        """Return the period containing the current clock tick."""
        return period_for_tick(self._clock.now(), self._config.periods)

    def create_budget(
        self,
        caller: str,
        total: int,
        limits: Sequence[int],
    ) -> BudgetRecord:
        """
        Create the caller's budget for the current period.

        Args:
            caller: Owner of the budget.
            total: Total spend allowed in the period.
            limits: Seven per-category limits ordered by category code
                (FOOD first, OTHER last). They must sum exactly to ``total``.

        Returns:
            The stored BudgetRecord.

        Raises:
            InvalidInputError: If ``total`` is below the configured minimum,
                ``limits`` is malformed, or its sum differs from ``total``.
            AlreadyExistsError: If the caller already has a budget for the
                current period.
        """
        validate_principal(caller)
        validate_amount(total, name="total")
        minimum = self._config.protocol.min_budget_amount
        if total < minimum:
            raise InvalidInputError(f"total must be at least {minimum}, got {total}")
        per_category = _parse_limits(limits)
        if sum(per_category.values()) != total:
            raise InvalidInputError(
                f"category limits sum to {sum(per_category.values())}, "
                f"expected exactly {total}"
            )

        now = self._clock.now()
        period = period_for_tick(now, self._config.periods)
        with self._storage.atomic():
            if self._storage.get_budget(caller, period.month, period.year) is not None:
                raise AlreadyExistsError(
                    f"'{caller}' already has a budget for {period.month}/{period.year}"
                )
            budget = BudgetRecord(
                owner=caller,
                month=period.month,
                year=period.year,
                total_budget=total,
                limits=per_category,
                created_at=now,
            )
            self._storage.save_budget(budget)

        self._events.record("budget_created", principal=caller, amount=total, tick=now)
        logger.info(
            "ledger_budget_created",
            extra={
                "principal": caller,
                "total": total,
                "month": period.month,
                "year": period.year,
            },
        )
        return budget.model_copy(deep=True)

    # ─── Queries ──────────────────────────────────────────────────────────────

    def find_budget(self, principal: str, period: Period) -> BudgetRecord | None:
        """Return the principal's budget for ``period``, or None."""
        return self._storage.get_budget(principal, period.month, period.year)

    def get_budget(self, principal: str, month: int, year: int) -> BudgetRecord:
        """
        Return the principal's budget for (month, year).

        Raises:
            NotFoundError: If no such budget exists.
        """
        budget = self._storage.get_budget(principal, month, year)
        if budget is None:
            raise NotFoundError("Budget", (principal, month, year))
        return budget

    def current_budget(self, principal: str) -> BudgetRecord | None:
        """Return the principal's budget for the current period, or None."""
        return self.find_budget(principal, self.current_period())

    def utilization(self, principal: str, month: int, year: int) -> BudgetUtilization:
        """Return a utilization snapshot of one budget."""
        return build_utilization(self.get_budget(principal, month, year))

    def list_budgets(self, principal: str) -> list[BudgetRecord]:
        """Return all budgets of ``principal``, oldest period first."""
        return sorted(
            self._storage.list_budgets(principal),
            key=lambda budget: (budget.year, budget.month),
        )


def _parse_limits(limits: Sequence[int]) -> dict[Category, int]:
    if isinstance(limits, (str, bytes)) or not isinstance(limits, Sequence):
        raise InvalidInputError("limits must be a sequence of per-category amounts")
    if len(limits) != len(Category):
        raise InvalidInputError(
            f"limits must contain exactly {len(Category)} values, got {len(limits)}"
        )
    parsed: dict[Category, int] = {}
    for category, limit in zip(Category, limits):
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidInputError(
                f"limit for {category.label()} must be a non-negative integer, got {limit!r}"
            )
        parsed[category] = limit
    return parsed
