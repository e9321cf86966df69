# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import logging

from savings_ledger.clock import Clock
from savings_ledger.custody import CustodyTransfer
from savings_ledger.errors import InsufficientFundsError
from savings_ledger.events import EventLog
from savings_ledger.storage.interface import LedgerStorage
from savings_ledger.validation import validate_amount, validate_principal

logger = logging.getLogger("savings_ledger.balances")


def credit_balance(storage: LedgerStorage, principal: str, amount: int) -> int:
    """Add ``amount`` to a balance and return the new balance."""
    new_balance = storage.get_balance(principal) + amount
    storage.set_balance(principal, new_balance)
    return new_balance


def debit_balance(storage: LedgerStorage, principal: str, amount: int) -> int:
    """
    Subtract ``amount`` from a balance and return the new balance.

    Raises:
        InsufficientFundsError: If the balance is lower than ``amount``.
    """
    current = storage.get_balance(principal)
    if current < amount:
        raise InsufficientFundsError(
            source=f"balance of '{principal}'", requested=amount, available=current
        )
    storage.set_balance(principal, current - amount)
    return current - amount


class BalanceLedger:
    """
    Per-principal available balances backed by custody.

    Value only enters through ``deposit`` (transfer, then credit) and only
    leaves through ``withdraw`` (debit, then transfer). A failed custody
    transfer aborts the whole operation and its error propagates unchanged.
    """

    def __init__(
        self,
        storage: LedgerStorage,
        custody: CustodyTransfer,
        clock: Clock,
        events: EventLog,
    ) -> None:
        self._storage = storage
        self._custody = custody
        self._clock = clock
        self._events = events

    def deposit(self, caller: str, amount: int) -> int:
        """
        Move ``amount`` from the caller into custody and credit their balance.

        Returns:
            The caller's new balance.

        Raises:
            InvalidInputError: If ``amount`` is not a positive integer.
        """
        validate_principal(caller)
        validate_amount(amount)

        with self._storage.atomic():
            self._custody.transfer_in(caller, amount)
            new_balance = credit_balance(self._storage, caller, amount)

        tick = self._clock.now()
        self._events.record("deposit", principal=caller, amount=amount, tick=tick)
        logger.info(
            "ledger_deposit",
            extra={"principal": caller, "amount": amount, "balance": new_balance},
        )
        return new_balance

    def withdraw(self, caller: str, amount: int) -> int:
        """
        Debit the caller's balance and release ``amount`` from custody.

        If the custody transfer fails the debit is rolled back.

        Returns:
            The caller's new balance.

        Raises:
            InvalidInputError: If ``amount`` is not a positive integer.
            InsufficientFundsError: If the balance is lower than ``amount``.
        """
        validate_principal(caller)
        validate_amount(amount)

        with self._storage.atomic():
            new_balance = debit_balance(self._storage, caller, amount)
            self._custody.transfer_out(caller, amount)

        tick = self._clock.now()
        self._events.record("withdraw", principal=caller, amount=amount, tick=tick)
        logger.info(
            "ledger_withdraw",
            extra={"principal": caller, "amount": amount, "balance": new_balance},
        )
        return new_balance

    def get_balance(self, principal: str) -> int:
        """Return the available balance; 0 for unknown principals."""
        return self._storage.get_balance(principal)
