# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Tests for the BudgetEngine and ExpenseJournal."""

from __future__ import annotations

import pytest

from savings_ledger.clock import ManualClock
from savings_ledger.errors import (
    AlreadyExistsError,
    BudgetExceededError,
    InvalidInputError,
    NotFoundError,
)
from savings_ledger.ledger import SavingsLedger
from savings_ledger.types import Category, ExpenseFilter, Period

ALICE = "alice"
BOB = "bob"
LIMITS = [3000, 2000, 1000, 1000, 1000, 1000, 1000]


@pytest.fixture
def budgeted_ledger(ledger: SavingsLedger) -> SavingsLedger:
    """Alice has a 10,000 budget for January 2024."""
    ledger.budgets.create_budget(ALICE, 10_000, LIMITS)
    return ledger


# ---------------------------------------------------------------------------
# TestCreateBudget
# ---------------------------------------------------------------------------


class TestCreateBudget:
    def test_budget_is_created_for_current_period(self, ledger: SavingsLedger) -> None:
        budget = ledger.budgets.create_budget(ALICE, 10_000, LIMITS)
        assert (budget.month, budget.year) == (1, 2024)
        assert budget.total_budget == 10_000
        assert budget.total_spent == 0
        assert budget.is_active is True
        assert budget.limits[Category.FOOD] == 3000
        assert budget.limits[Category.OTHER] == 1000
        assert sum(budget.limits.values()) == budget.total_budget
        assert all(spent == 0 for spent in budget.spent.values())

    def test_limits_must_sum_exactly_to_total(self, ledger: SavingsLedger) -> None:
        with pytest.raises(InvalidInputError, match="sum to 9999"):
            ledger.budgets.create_budget(ALICE, 10_000, [2999, 2000, 1000, 1000, 1000, 1000, 1000])
        assert ledger.budgets.current_budget(ALICE) is None

    def test_total_below_minimum_is_invalid(self, ledger: SavingsLedger) -> None:
        with pytest.raises(InvalidInputError, match="at least 1000"):
            ledger.budgets.create_budget(ALICE, 700, [100] * 7)

    @pytest.mark.parametrize(
        "limits",
        [
            [5000, 5000],
            [3000, 2000, 1000, 1000, 1000, 1000, 1000, 0],
            [3000, 2000, 1000, 1000, 1000, 2000, -1000],
            "3000200010001000",
        ],
    )
    def test_malformed_limits_are_invalid(self, ledger: SavingsLedger, limits: object) -> None:
        with pytest.raises(InvalidInputError):
            ledger.budgets.create_budget(ALICE, 10_000, limits)  # type: ignore[arg-type]

    def test_second_budget_in_same_period_already_exists(
        self, budgeted_ledger: SavingsLedger, clock: ManualClock
    ) -> None:
        clock.advance(99)  # still January
        with pytest.raises(AlreadyExistsError):
            budgeted_ledger.budgets.create_budget(ALICE, 20_000, [x * 2 for x in LIMITS])
        assert budgeted_ledger.budgets.get_budget(ALICE, 1, 2024).total_budget == 10_000

    def test_new_period_allows_a_new_budget(
        self, budgeted_ledger: SavingsLedger, clock: ManualClock
    ) -> None:
        clock.advance(100)
        budget = budgeted_ledger.budgets.create_budget(ALICE, 5_000, [1000, 1000, 1000, 500, 500, 500, 500])
        assert (budget.month, budget.year) == (2, 2024)
        assert [(b.month, b.year) for b in budgeted_ledger.budgets.list_budgets(ALICE)] == [
            (1, 2024),
            (2, 2024),
        ]

    def test_budgets_are_per_principal(self, budgeted_ledger: SavingsLedger) -> None:
        budget = budgeted_ledger.budgets.create_budget(BOB, 10_000, LIMITS)
        assert budget.owner == BOB

    def test_get_missing_budget_raises_not_found(self, ledger: SavingsLedger) -> None:
        with pytest.raises(NotFoundError):
            ledger.budgets.get_budget(ALICE, 1, 2024)

    def test_find_budget_returns_none_when_missing(self, ledger: SavingsLedger) -> None:
        assert ledger.budgets.find_budget(ALICE, Period(month=3, year=2024)) is None


# ---------------------------------------------------------------------------
# TestAddExpense
# ---------------------------------------------------------------------------


class TestAddExpense:
    def test_expense_is_charged_to_matching_category(self, budgeted_ledger: SavingsLedger) -> None:
        expense_id = budgeted_ledger.expenses.add_expense(ALICE, 500, 1, "groceries")
        budget = budgeted_ledger.budgets.get_budget(ALICE, 1, 2024)
        assert expense_id == 1
        assert budget.spent[Category.FOOD] == 500
        assert budget.total_spent == 500
        assert budget.total_spent == sum(budget.spent.values())

    def test_expense_record_is_journaled(
        self, budgeted_ledger: SavingsLedger, clock: ManualClock
    ) -> None:
        clock.advance(42)
        expense_id = budgeted_ledger.expenses.add_expense(ALICE, 120, Category.TRANSPORT, "bus pass")
        expense = budgeted_ledger.expenses.get_expense(expense_id)
        assert expense.user == ALICE
        assert expense.amount == 120
        assert expense.category is Category.TRANSPORT
        assert expense.description == "bus pass"
        assert expense.recorded_at == 42
        assert (expense.month, expense.year) == (1, 2024)

    def test_expense_ids_are_strictly_increasing(self, ledger: SavingsLedger) -> None:
        ids = [ledger.expenses.add_expense(ALICE, 10, 7, f"item {i}") for i in range(3)]
        assert ids == [1, 2, 3]

    def test_expense_without_budget_is_still_recorded(self, ledger: SavingsLedger) -> None:
        expense_id = ledger.expenses.add_expense(ALICE, 1_000_000, Category.SHOPPING, "yacht")
        assert ledger.expenses.get_expense(expense_id).amount == 1_000_000
        assert ledger.budgets.current_budget(ALICE) is None

    def test_exceeding_budget_fails_and_writes_nothing(self, budgeted_ledger: SavingsLedger) -> None:
        budgeted_ledger.expenses.add_expense(ALICE, 500, 1, "groceries")
        with pytest.raises(BudgetExceededError) as exc_info:
            budgeted_ledger.expenses.add_expense(ALICE, 9_600, 1, "feast")
        assert exc_info.value.available == 9_500
        budget = budgeted_ledger.budgets.get_budget(ALICE, 1, 2024)
        assert budget.total_spent == 500
        assert budget.spent[Category.FOOD] == 500
        assert budgeted_ledger.expenses.expense_count() == 1
        # The failed attempt did not consume an id.
        assert budgeted_ledger.expenses.add_expense(ALICE, 1, 1, "gum") == 2

    def test_spending_exactly_to_total_is_allowed(self, budgeted_ledger: SavingsLedger) -> None:
        budgeted_ledger.expenses.add_expense(ALICE, 10_000, Category.OTHER, "rent")
        assert budgeted_ledger.budgets.get_budget(ALICE, 1, 2024).remaining == 0

    def test_category_limit_is_not_enforced_only_total(self, budgeted_ledger: SavingsLedger) -> None:
        budgeted_ledger.expenses.add_expense(ALICE, 4_000, Category.FOOD, "bulk order")
        utilization = budgeted_ledger.budgets.utilization(ALICE, 1, 2024)
        food = utilization.categories[0]
        assert food.category is Category.FOOD
        assert food.spent == 4_000
        assert food.available == 0
        assert utilization.available == 6_000
        assert utilization.utilization_percent == pytest.approx(40.0)

    def test_expense_in_later_period_is_not_charged_to_old_budget(
        self, budgeted_ledger: SavingsLedger, clock: ManualClock
    ) -> None:
        clock.advance(100)
        expense_id = budgeted_ledger.expenses.add_expense(ALICE, 20_000, 4, "annual insurance")
        assert budgeted_ledger.expenses.get_expense(expense_id).month == 2
        assert budgeted_ledger.budgets.get_budget(ALICE, 1, 2024).total_spent == 0

    def test_other_principals_budget_is_untouched(self, budgeted_ledger: SavingsLedger) -> None:
        budgeted_ledger.expenses.add_expense(BOB, 50_000, 1, "bob spends")
        assert budgeted_ledger.budgets.get_budget(ALICE, 1, 2024).total_spent == 0

    @pytest.mark.parametrize(
        ("amount", "category", "description"),
        [
            (0, 1, "zero"),
            (-5, 1, "negative"),
            (10, 0, "category below range"),
            (10, 8, "category above range"),
            (10, 1, ""),
            (10, 1, "x" * 257),
        ],
    )
    def test_malformed_expense_is_invalid(
        self,
        budgeted_ledger: SavingsLedger,
        amount: int,
        category: int,
        description: str,
    ) -> None:
        with pytest.raises(InvalidInputError):
            budgeted_ledger.expenses.add_expense(ALICE, amount, category, description)
        assert budgeted_ledger.expenses.expense_count() == 0
        assert budgeted_ledger.budgets.get_budget(ALICE, 1, 2024).total_spent == 0

    def test_description_at_max_length_is_accepted(self, ledger: SavingsLedger) -> None:
        ledger.expenses.add_expense(ALICE, 10, 1, "x" * 256)
        assert ledger.expenses.expense_count() == 1

    def test_expense_updates_last_activity(
        self, ledger: SavingsLedger, clock: ManualClock
    ) -> None:
        clock.advance(17)
        ledger.expenses.add_expense(ALICE, 10, 1, "coffee")
        assert ledger.stats.get_stats(ALICE).last_activity_tick == 17

    def test_get_missing_expense_raises_not_found(self, ledger: SavingsLedger) -> None:
        with pytest.raises(NotFoundError):
            ledger.expenses.get_expense(1)


# ---------------------------------------------------------------------------
# TestListExpenses
# ---------------------------------------------------------------------------


class TestListExpenses:
    @pytest.fixture
    def journal_ledger(self, ledger: SavingsLedger, clock: ManualClock) -> SavingsLedger:
        ledger.expenses.add_expense(ALICE, 100, Category.FOOD, "lunch")
        ledger.expenses.add_expense(BOB, 250, Category.FOOD, "dinner")
        clock.advance(100)
        ledger.expenses.add_expense(ALICE, 900, Category.UTILITIES, "power bill")
        return ledger

    def test_unfiltered_returns_all_in_id_order(self, journal_ledger: SavingsLedger) -> None:
        assert [e.id for e in journal_ledger.expenses.list_expenses()] == [1, 2, 3]

    def test_filter_by_user_and_category(self, journal_ledger: SavingsLedger) -> None:
        result = journal_ledger.expenses.list_expenses(
            ExpenseFilter(user=ALICE, category=Category.FOOD)
        )
        assert [e.description for e in result] == ["lunch"]

    def test_filter_by_period(self, journal_ledger: SavingsLedger) -> None:
        result = journal_ledger.expenses.list_expenses(ExpenseFilter(month=2, year=2024))
        assert [e.id for e in result] == [3]

    def test_filter_by_amount_range(self, journal_ledger: SavingsLedger) -> None:
        result = journal_ledger.expenses.list_expenses(ExpenseFilter(min_amount=200, max_amount=900))
        assert [e.id for e in result] == [2, 3]
