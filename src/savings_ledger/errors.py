# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class LedgerError(Exception):
    """Base class for all savings-ledger errors."""

    def __init__(self, message: str, code: str = "LEDGER_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class UnauthorizedError(LedgerError):
    """
    Raised when the caller lacks rights over a resource or privileged action.

    Attributes:
        caller: The principal that attempted the action.
        action: Short name of the attempted action.
    """

    def __init__(self, caller: str, action: str) -> None:
        super().__init__(
            f"Principal '{caller}' is not authorised to {action}.",
            code="UNAUTHORIZED",
        )
        self.caller = caller
        self.action = action


class NotFoundError(LedgerError):
    """Raised when a referenced budget, expense or goal does not exist."""

    def __init__(self, resource: str, key: object) -> None:
        super().__init__(f"{resource} {key!r} does not exist.", code="NOT_FOUND")
        self.resource = resource
        self.key = key


class InvalidInputError(LedgerError):
    """Raised for malformed amounts, categories, strings or limit sums."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, code="INVALID_INPUT")
        self.reason = reason


class InsufficientFundsError(LedgerError):
    """
    Raised when a balance or the reward pool is too low for a debit.

    Attributes:
        requested: The amount the operation needed.
        available: The amount that was available.
    """

    def __init__(self, source: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient funds in {source}: requested {requested} "
            f"but only {available} available.",
            code="INSUFFICIENT_FUNDS",
        )
        self.source = source
        self.requested = requested
        self.available = available


class BudgetExceededError(LedgerError):
    """
    Raised when an expense would push a budget's spend past its total.

    Attributes:
        owner: Owner of the budget.
        requested: The expense amount.
        available: Budget remaining before the expense.
    """

    def __init__(self, owner: str, requested: int, available: int) -> None:
        super().__init__(
            f"Budget for '{owner}': expense of {requested} "
            f"exceeds the {available} remaining.",
            code="BUDGET_EXCEEDED",
        )
        self.owner = owner
        self.requested = requested
        self.available = available


class GoalNotMetError(LedgerError):
    """Raised when a reward is claimed for a goal that is not completed."""

    def __init__(self, goal_id: int, current_amount: int, target_amount: int) -> None:
        super().__init__(
            f"Goal {goal_id} is not completed: {current_amount} of "
            f"{target_amount} saved.",
            code="GOAL_NOT_MET",
        )
        self.goal_id = goal_id
        self.current_amount = current_amount
        self.target_amount = target_amount


class AlreadyExistsError(LedgerError):
    """Raised on a duplicate budget, or a re-claim / re-complete attempt."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, code="ALREADY_EXISTS")
        self.reason = reason


class GoalExpiredError(LedgerError):
    """Raised when contributing to a goal after its deadline tick."""

    def __init__(self, goal_id: int, deadline_tick: int, now: int) -> None:
        super().__init__(
            f"Goal {goal_id} expired at tick {deadline_tick} (now {now}).",
            code="GOAL_EXPIRED",
        )
        self.goal_id = goal_id
        self.deadline_tick = deadline_tick
        self.now = now


class CustodyTransferError(LedgerError):
    """Raised by a custody backend when a value transfer cannot complete."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, code="CUSTODY_TRANSFER_FAILED")
        self.reason = reason
