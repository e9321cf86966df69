# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
basic_ledger.py

Demonstrates one month of a saver's activity:
  1. Deposit into the ledger and set a monthly budget.
  2. Record expenses until the budget refuses one.
  3. Save into a goal, complete it and claim the reward.
  4. Inspect utilization, stats and conservation at the end.

Run with:  python examples/basic_ledger.py
(with savings-ledger installed)
"""

from savings_ledger import (
    BudgetExceededError,
    Category,
    ExpenseFilter,
    LedgerConfig,
    SavingsLedger,
)

# ─── Setup ────────────────────────────────────────────────────────────────────

ledger = SavingsLedger(LedgerConfig(admin="treasury"))
ledger.custody.mint("alice", 20_000)
ledger.custody.mint("treasury", 1_000)

ledger.rewards.fund("treasury", 1_000)
ledger.balances.deposit("alice", 15_000)
ledger.budgets.create_budget("alice", 5_000, [2000, 1000, 500, 500, 500, 300, 200])

# ─── Simulate a month of spending ─────────────────────────────────────────────

purchases = [
    (350, Category.FOOD, "groceries"),
    (120, Category.TRANSPORT, "bus pass"),
    (900, Category.UTILITIES, "power bill"),
    (2_400, Category.SHOPPING, "new phone"),
    (1_500, Category.ENTERTAINMENT, "festival tickets"),
]

for amount, category, description in purchases:
    try:
        expense_id = ledger.expenses.add_expense("alice", amount, category, description)
    except BudgetExceededError as exc:
        print(f"DENIED   {amount:>6}  {description:<18} available={exc.available}")
        continue
    print(f"RECORDED {amount:>6}  {description:<18} id={expense_id}")

# ─── Save towards a goal ──────────────────────────────────────────────────────

goal_id = ledger.goals.create_goal("alice", "Emergency fund", 5_000, deadline_months=6)
for amount in (2_000, 2_000, 1_000):
    result = ledger.goals.contribute("alice", goal_id, amount)
    print(f"Goal {goal_id}: {result.current_amount}/{result.target_amount}")

bonus = ledger.goals.claim_reward("alice", goal_id)
print(f"Reward claimed: {bonus}")

# ─── Final snapshot ───────────────────────────────────────────────────────────

period = ledger.current_period()
utilization = ledger.budgets.utilization("alice", period.month, period.year)
stats = ledger.stats.get_stats("alice")

print("\n── Budget summary ────────────────────────────────────")
print(f"  Period      : {utilization.month}/{utilization.year}")
print(f"  Budget      : {utilization.total_budget}")
print(f"  Spent       : {utilization.total_spent}")
print(f"  Available   : {utilization.available}")
print(f"  Utilization : {utilization.utilization_percent:.1f}%")
print("──────────────────────────────────────────────────────")
print(f"  Balance     : {ledger.balances.get_balance('alice')}")
print(f"  Goals met   : {stats.goals_achieved}")
print(f"  Total saved : {stats.total_saved}")
print(f"  Conserved   : {ledger.verify_conservation()}")

# ─── Expense journal ──────────────────────────────────────────────────────────

expenses = ledger.expenses.list_expenses(ExpenseFilter(user="alice"))
print(f"\n{len(expenses)} expenses recorded:")
for expense in expenses:
    print(f"  [{expense.id}] {expense.amount:>6}  {expense.category.label():<14} {expense.description}")
