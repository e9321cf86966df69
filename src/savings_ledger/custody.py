# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Custody transfer contract.

The ledger never creates or destroys settlement value itself: deposits and
pool funding pull value into custody through ``transfer_in`` and withdrawals
push it back out through ``transfer_out``. A backend must either complete a
transfer or raise without side effects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from savings_ledger.errors import CustodyTransferError


class CustodyTransfer(ABC):
    """
    Moves settlement value between external owners and ledger custody.

    Implementors may wrap a payment rail, a token contract, or a bank
    account. Errors raised by a backend propagate unchanged out of the
    ledger operation that triggered them.
    """

    @abstractmethod
    def transfer_in(self, owner: str, amount: int) -> None:
        """Move ``amount`` from ``owner`` into ledger custody."""
        ...

    @abstractmethod
    def transfer_out(self, owner: str, amount: int) -> None:
        """Move ``amount`` from ledger custody to ``owner``."""
        ...

    @abstractmethod
    def custody_balance(self) -> int:
        """Return the total value currently held in custody."""
        ...


class MemoryCustody(CustodyTransfer):
    """
    In-process custody backend for simulations and testing.

    External owners hold wallets that must be seeded with ``mint`` before
    they can deposit.
    """

    def __init__(self) -> None:
        self._wallets: dict[str, int] = {}
        self._held = 0

    def mint(self, owner: str, amount: int) -> None:
        """Credit an external wallet with freshly issued value."""
        if amount <= 0:
            raise ValueError(f"amount must be positive; got {amount}.")
        self._wallets[owner] = self._wallets.get(owner, 0) + amount

    def wallet_balance(self, owner: str) -> int:
        return self._wallets.get(owner, 0)

    def transfer_in(self, owner: str, amount: int) -> None:
        available = self._wallets.get(owner, 0)
        if available < amount:
            raise CustodyTransferError(
                f"wallet of '{owner}' holds {available}, cannot transfer {amount}"
            )
        self._wallets[owner] = available - amount
        self._held += amount

    def transfer_out(self, owner: str, amount: int) -> None:
        if self._held < amount:
            raise CustodyTransferError(
                f"custody holds {self._held}, cannot release {amount}"
            )
        self._held -= amount
        self._wallets[owner] = self._wallets.get(owner, 0) + amount

    def custody_balance(self) -> int:
        return self._held
