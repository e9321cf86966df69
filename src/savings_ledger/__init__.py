# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
savings-ledger: deterministic budgets, expenses, savings goals and rewards.

Quick start::

    from savings_ledger import Category, LedgerConfig, SavingsLedger

    ledger = SavingsLedger(LedgerConfig(admin="treasury"))
    ledger.custody.mint("alice", 10_000)
    ledger.balances.deposit("alice", 10_000)

    ledger.budgets.create_budget("alice", 10_000, [3000, 2000, 1000, 1000, 1000, 1000, 1000])
    ledger.expenses.add_expense("alice", 500, Category.FOOD, "weekly groceries")
"""

from savings_ledger.balances import BalanceLedger
from savings_ledger.budgets import BudgetEngine, build_utilization
from savings_ledger.clock import Clock, ManualClock, period_for_tick, ticks_for_months
from savings_ledger.config import EventConfig, LedgerConfig, PeriodConfig, ProtocolConfig
from savings_ledger.custody import CustodyTransfer, MemoryCustody
from savings_ledger.errors import (
    AlreadyExistsError,
    BudgetExceededError,
    CustodyTransferError,
    GoalExpiredError,
    GoalNotMetError,
    InsufficientFundsError,
    InvalidInputError,
    LedgerError,
    NotFoundError,
    UnauthorizedError,
)
from savings_ledger.events import EventFilter, EventLog, EventQueryResult, LedgerEvent
from savings_ledger.expenses import ExpenseJournal, filter_expenses
from savings_ledger.goals import GoalEngine
from savings_ledger.ledger import SavingsLedger
from savings_ledger.rewards import RewardPool
from savings_ledger.stats import StatsAggregator
from savings_ledger.storage import LedgerStorage, MemoryStorage
from savings_ledger.types import (
    BudgetRecord,
    BudgetUtilization,
    Category,
    CategoryUtilization,
    ContributionResult,
    ExpenseFilter,
    ExpenseRecord,
    GoalRecord,
    GoalStatus,
    Period,
    UserStats,
)

__version__ = "0.1.0"

__all__ = [
    # Core class
    "SavingsLedger",
    # Components
    "BalanceLedger",
    "BudgetEngine",
    "ExpenseJournal",
    "GoalEngine",
    "RewardPool",
    "StatsAggregator",
    "EventLog",
    # Configuration
    "LedgerConfig",
    "ProtocolConfig",
    "PeriodConfig",
    "EventConfig",
    # Types
    "Category",
    "Period",
    "BudgetRecord",
    "BudgetUtilization",
    "CategoryUtilization",
    "ExpenseRecord",
    "ExpenseFilter",
    "GoalRecord",
    "GoalStatus",
    "ContributionResult",
    "UserStats",
    "LedgerEvent",
    "EventFilter",
    "EventQueryResult",
    # External collaborators
    "Clock",
    "ManualClock",
    "CustodyTransfer",
    "MemoryCustody",
    # Storage
    "LedgerStorage",
    "MemoryStorage",
    # Utilities
    "period_for_tick",
    "ticks_for_months",
    "build_utilization",
    "filter_expenses",
    # Errors
    "LedgerError",
    "UnauthorizedError",
    "NotFoundError",
    "InvalidInputError",
    "InsufficientFundsError",
    "BudgetExceededError",
    "GoalNotMetError",
    "AlreadyExistsError",
    "GoalExpiredError",
    "CustodyTransferError",
    "__version__",
]
