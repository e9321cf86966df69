# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from savings_ledger.clock import Clock
from savings_ledger.config import LedgerConfig
from savings_ledger.custody import CustodyTransfer
from savings_ledger.errors import InsufficientFundsError, UnauthorizedError
from savings_ledger.events import EventLog
from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.validation import validate_amount, validate_principal

logger = logging.getLogger("savings_ledger.rewards")


def draw_reward(storage: LedgerStorage, amount: int) -> int:
    """
    Take ``amount`` out of the reward pool and return the new pool balance.

    Raises:
        InsufficientFundsError: If the pool holds less than ``amount``.
    """
    pool = storage.get_reward_pool()
    if pool < amount:
        raise InsufficientFundsError(source="reward pool", requested=amount, available=pool)
    storage.set_reward_pool(pool - amount)
    return pool - amount


class RewardPool:
    """
    Shared bonus pool paid out on goal-completion claims.

    Only the configured admin can add to the pool, and only by transferring
    value into custody first.
    """

    def __init__(
        self,
        storage: LedgerStorage,
        custody: CustodyTransfer,
        clock: Clock,
        config: LedgerConfig,
        events: EventLog,
    ) -> None:
        self._storage = storage
        self._custody = custody
        self._clock = clock
        self._config = config
        self._events = events

    def fund(self, caller: str, amount: int) -> int:
        """
        Transfer ``amount`` from the admin into custody and add it to the pool.

        Returns:
            The new pool balance.

        Raises:
            UnauthorizedError: If ``caller`` is not the configured admin.
            InvalidInputError: If ``amount`` is not a positive integer.
        """
        validate_principal(caller)
        if caller != self._config.admin:
            raise UnauthorizedError(caller, "fund the reward pool")
        validate_amount(amount)

        with self._storage.atomic():
            self._custody.transfer_in(caller, amount)
            new_pool = self._storage.get_reward_pool() + amount
            self._storage.set_reward_pool(new_pool)

        self._events.record("pool_funded", principal=caller, amount=amount, tick=self._clock.now())
        logger.info("ledger_pool_funded", extra={"amount": amount, "pool": new_pool})
        return new_pool

    def balance(self) -> int:
        """Return the current pool balance."""
        return self._storage.get_reward_pool()
