# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from savings_ledger.balances import credit_balance, debit_balance
from savings_ledger.clock import Clock, ticks_for_months
from savings_ledger.config import LedgerConfig
from savings_ledger.errors import (
    AlreadyExistsError,
    GoalExpiredError,
    GoalNotMetError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from savings_ledger.events import EventLog
from savings_ledger.rewards import draw_reward
from savings_ledger.stats import record_goal_completion
from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.types import ContributionResult, GoalRecord, GoalStatus
from savings_ledger.validation import validate_amount, validate_principal, validate_text

logger = logging.getLogger("savings_ledger.goals")


class GoalEngine:
    """
    Savings goals with a deadline, contributions and a one-time reward.

    Lifecycle
    ---------
    open -> contributing -> completed -> rewarded

    A goal whose deadline passes before completion is ``expired``: it
    accepts no further contributions. A goal completed before its deadline
    can still be rewarded after it. Contributions move value out of the
    owner's available balance; nothing releases it back.

    Example::

        goal_id = goals.create_goal("alice", "Emergency fund", 5_000, deadline_months=6)
        result = goals.contribute("alice", goal_id, 5_000)
        if result.completed:
            goals.claim_reward("alice", goal_id)
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

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_goal(
        self,
        caller: str,
        title: str,
        target_amount: int,
        deadline_months: int,
    ) -> int:
        """
        Create an open goal owned by the caller.

        Args:
            caller: Owner of the goal.
            title: Non-empty title, bounded in length.
            target_amount: Amount to save; at least the configured minimum.
            deadline_months: Months from now until the deadline, 1..60.

        Returns:
            The new goal id.

        Raises:
            InvalidInputError: On a malformed title, target or deadline.
        """
        protocol = self._config.protocol
        validate_principal(caller)
        validate_text(title, name="title", max_length=protocol.max_title_length)
        validate_amount(target_amount, name="target_amount")
        if target_amount < protocol.min_goal_amount:
            raise InvalidInputError(
                f"target_amount must be at least {protocol.min_goal_amount}, got {target_amount}"
            )
        if (
            isinstance(deadline_months, bool)
            or not isinstance(deadline_months, int)
            or not 1 <= deadline_months <= protocol.max_deadline_months
        ):
            raise InvalidInputError(
                f"deadline_months must be between 1 and {protocol.max_deadline_months}, "
                f"got {deadline_months!r}"
            )

        now = self._clock.now()
        with self._storage.atomic():
            goal = GoalRecord(
                id=self._storage.next_goal_id(),
                owner=caller,
                title=title,
                target_amount=target_amount,
                deadline_tick=now + ticks_for_months(deadline_months, self._config.periods),
                created_at=now,
            )
            self._storage.save_goal(goal)

        self._events.record(
            "goal_created",
            principal=caller,
            amount=target_amount,
            tick=now,
            reference_id=goal.id,
        )
        logger.info(
            "ledger_goal_created",
            extra={
                "principal": caller,
                "goal_id": goal.id,
                "target_amount": target_amount,
                "deadline_tick": goal.deadline_tick,
            },
        )
        return goal.id

    def contribute(self, caller: str, goal_id: int, amount: int) -> ContributionResult:
        """
        Move ``amount`` from the caller's balance into one of their goals.

        Reaching the target completes the goal and updates the owner's stats
        in the same transition.

        Raises:
            NotFoundError: If the goal does not exist.
            UnauthorizedError: If the caller does not own the goal.
            AlreadyExistsError: If the goal is already completed.
            GoalExpiredError: If the goal's deadline has passed.
            InvalidInputError: If ``amount`` is not a positive integer.
            InsufficientFundsError: If the caller's balance is too low.
        """
        validate_principal(caller)
        now = self._clock.now()

        with self._storage.atomic():
            goal = self._require_owned_goal(caller, goal_id, action="contribute to")
            if goal.is_completed:
                raise AlreadyExistsError(f"goal {goal_id} is already completed")
            if now > goal.deadline_tick:
                raise GoalExpiredError(goal_id=goal_id, deadline_tick=goal.deadline_tick, now=now)
            validate_amount(amount)

            debit_balance(self._storage, caller, amount)
            goal.current_amount += amount
            completed = goal.current_amount >= goal.target_amount
            if completed:
                goal.is_completed = True
                record_goal_completion(self._storage, caller, goal.target_amount, now)
            self._storage.save_goal(goal)

        self._events.record(
            "goal_contribution",
            principal=caller,
            amount=amount,
            tick=now,
            reference_id=goal_id,
        )
        if completed:
            self._events.record(
                "goal_completed",
                principal=caller,
                amount=goal.target_amount,
                tick=now,
                reference_id=goal_id,
            )
        logger.info(
            "ledger_goal_contribution",
            extra={
                "principal": caller,
                "goal_id": goal_id,
                "amount": amount,
                "current_amount": goal.current_amount,
                "completed": completed,
            },
        )
        return ContributionResult(
            goal_id=goal_id,
            amount=amount,
            current_amount=goal.current_amount,
            target_amount=goal.target_amount,
            completed=completed,
        )

    def claim_reward(self, caller: str, goal_id: int) -> int:
        """
        Pay the achievement bonus for a completed goal, exactly once.

        Returns:
            The bonus credited to the caller's balance.

        Raises:
            NotFoundError: If the goal does not exist.
            UnauthorizedError: If the caller does not own the goal.
            GoalNotMetError: If the goal is not completed.
            AlreadyExistsError: If the reward was already claimed.
            InsufficientFundsError: If the pool holds less than the bonus.
        """
        validate_principal(caller)
        bonus = self._config.protocol.achievement_bonus

        with self._storage.atomic():
            goal = self._require_owned_goal(caller, goal_id, action="claim the reward of")
            if not goal.is_completed:
                raise GoalNotMetError(
                    goal_id=goal_id,
                    current_amount=goal.current_amount,
                    target_amount=goal.target_amount,
                )
            if goal.reward_claimed:
                raise AlreadyExistsError(f"reward for goal {goal_id} was already claimed")

            draw_reward(self._storage, bonus)
            credit_balance(self._storage, caller, bonus)
            goal.reward_claimed = True
            self._storage.save_goal(goal)

        self._events.record(
            "reward_claimed",
            principal=caller,
            amount=bonus,
            tick=self._clock.now(),
            reference_id=goal_id,
        )
        logger.info(
            "ledger_reward_claimed",
            extra={"principal": caller, "goal_id": goal_id, "bonus": bonus},
        )
        return bonus

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_goal(self, goal_id: int) -> GoalRecord:
        """
        Return one goal.

        Raises:
            NotFoundError: If no goal has ``goal_id``.
        """
        goal = self._storage.get_goal(goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    def list_goals(self, owner: str | None = None) -> list[GoalRecord]:
        """Return goals in id order, optionally only those of ``owner``."""
        goals = sorted(self._storage.list_goals(), key=lambda goal: goal.id)
        if owner is None:
            return goals
        return [goal for goal in goals if goal.owner == owner]

    def goal_status(self, goal_id: int) -> GoalStatus:
        """Return the lifecycle state of a goal at the current tick."""
        return self.get_goal(goal_id).status(self._clock.now())

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _require_owned_goal(self, caller: str, goal_id: int, action: str) -> GoalRecord:
        goal = self.get_goal(goal_id)
        if goal.owner != caller:
            raise UnauthorizedError(caller, f"{action} goal {goal_id}")
        return goal
