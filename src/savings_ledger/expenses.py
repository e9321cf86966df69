# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from savings_ledger.budgets import charge_budget
from savings_ledger.clock import Clock, period_for_tick
from savings_ledger.config import LedgerConfig
from savings_ledger.errors import NotFoundError
from savings_ledger.events import EventLog
from savings_ledger.stats import touch_activity
from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.types import ExpenseFilter, ExpenseRecord
from savings_ledger.validation import (
    validate_amount,
    validate_category,
    validate_principal,
    validate_text,
)

logger = logging.getLogger("savings_ledger.expenses")


class ExpenseJournal:
    """
    Append-only journal of spend events.

    An expense is always journaled, with or without a budget. When the
    caller has an active budget for the current period the expense is
    charged against it in the same transition; if that would exceed the
    budget, nothing is written at all. There is no update or delete.
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

    def add_expense(
        self,
        caller: str,
        amount: int,
        category: int,
        description: str,
    ) -> int:
        """
        Record an expense for the caller in the current period.

        Args:
            caller: The principal who spent.
            amount: Positive amount spent.
            category: Category code in 1..7 (see :class:`Category`).
            description: Non-empty description, bounded in length.

        Returns:
            The new expense id.

        Raises:
            InvalidInputError: On a malformed amount, category or description.
            BudgetExceededError: If an active budget for the period would be
                exceeded. No expense is recorded in that case.
        """
        validate_principal(caller)
        validate_amount(amount)
        expense_category = validate_category(category)
        validate_text(
            description,
            name="description",
            max_length=self._config.protocol.max_description_length,
        )

        now = self._clock.now()
        period = period_for_tick(now, self._config.periods)
        with self._storage.atomic():
            budget = self._storage.get_budget(caller, period.month, period.year)
            budgeted = False
            if budget is not None and budget.is_active:
                self._storage.save_budget(charge_budget(budget, expense_category, amount))
                budgeted = True

            expense = ExpenseRecord(
                id=self._storage.next_expense_id(),
                user=caller,
                amount=amount,
                category=expense_category,
                description=description,
                recorded_at=now,
                month=period.month,
                year=period.year,
            )
            self._storage.save_expense(expense)
            touch_activity(self._storage, caller, now)

        self._events.record(
            "expense_recorded",
            principal=caller,
            amount=amount,
            tick=now,
            reference_id=expense.id,
        )
        logger.info(
            "ledger_expense_recorded",
            extra={
                "principal": caller,
                "expense_id": expense.id,
                "amount": amount,
                "category": expense_category.label(),
                "budgeted": budgeted,
            },
        )
        return expense.id

    def get_expense(self, expense_id: int) -> ExpenseRecord:
        """
        Return one expense.

        Raises:
            NotFoundError: If no expense has ``expense_id``.
        """
        expense = self._storage.get_expense(expense_id)
        if expense is None:
            raise NotFoundError("Expense", expense_id)
        return expense

    def list_expenses(self, expense_filter: ExpenseFilter | None = None) -> list[ExpenseRecord]:
        """Return expenses in id order, optionally filtered."""
        expenses = sorted(self._storage.list_expenses(), key=lambda expense: expense.id)
        return filter_expenses(expenses, expense_filter)

    def expense_count(self) -> int:
        return len(self._storage.list_expenses())


def filter_expenses(
    expenses: list[ExpenseRecord],
    expense_filter: ExpenseFilter | None,
) -> list[ExpenseRecord]:
    """
    Apply an optional ExpenseFilter to a list of expenses.
    All filter fields are AND-ed together.
    The input list is left untouched.
    """
    if expense_filter is None:
        return list(expenses)

    results: list[ExpenseRecord] = []
    for expense in expenses:
        if expense_filter.user is not None and expense.user != expense_filter.user:
            continue
        if expense_filter.category is not None and expense.category != expense_filter.category:
            continue
        if expense_filter.month is not None and expense.month != expense_filter.month:
            continue
        if expense_filter.year is not None and expense.year != expense_filter.year:
            continue
        if expense_filter.min_amount is not None and expense.amount < expense_filter.min_amount:
            continue
        if expense_filter.max_amount is not None and expense.amount > expense_filter.max_amount:
            continue
        results.append(expense)

    return results
