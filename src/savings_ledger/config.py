# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class ProtocolConfig(BaseModel, frozen=True):
    """
    Economic constants of the ledger.

    These values determine who may create budgets and goals and how much a
    completed goal pays out, so they are configuration rather than literals.

    Attributes:
        min_budget_amount: Smallest total accepted by ``create_budget``.
        min_goal_amount: Smallest target accepted by ``create_goal``.
        achievement_bonus: Fixed amount paid from the reward pool per claim.
        max_deadline_months: Longest goal deadline, in months.
        max_title_length: Maximum goal title length in characters.
        max_description_length: Maximum expense description length.
    """

    min_budget_amount: Annotated[int, Field(gt=0)] = 1_000
    min_goal_amount: Annotated[int, Field(gt=0)] = 1_000
    achievement_bonus: Annotated[int, Field(gt=0)] = 100
    max_deadline_months: Annotated[int, Field(ge=1)] = 60
    max_title_length: Annotated[int, Field(gt=0)] = 100
    max_description_length: Annotated[int, Field(gt=0)] = 256


class PeriodConfig(BaseModel, frozen=True):
    """
    Fixed-width windows used to derive a (month, year) period from a tick.

    Attributes:
        ticks_per_month: Number of clock ticks in one budgeting month.
        epoch_tick: Tick at which month 1 of ``epoch_year`` starts.
        epoch_year: Calendar year label of the first 12-month cycle.
    """

    ticks_per_month: Annotated[int, Field(gt=0)] = 4_320
    epoch_tick: Annotated[int, Field(ge=0)] = 0
    epoch_year: Annotated[int, Field(ge=1)] = 2024


class EventConfig(BaseModel, frozen=True):
    """
    Configuration for the ledger EventLog.

    Attributes:
        max_events: Maximum number of events retained in memory. Oldest
            events are evicted when this limit is reached.
    """

    max_events: Annotated[int, Field(gt=0)] = 10_000


class LedgerConfig(BaseModel, frozen=True):
    """
    Top-level configuration for a SavingsLedger.

    Example::

        config = LedgerConfig(
            admin="treasury",
            protocol=ProtocolConfig(achievement_bonus=250),
            periods=PeriodConfig(ticks_per_month=30),
        )
        ledger = SavingsLedger(config)

    Attributes:
        admin: The privileged principal allowed to fund the reward pool.
    """

    admin: str = Field(..., min_length=1)
    protocol: ProtocolConfig = Field(default_factory=ProtocolConfig)
    periods: PeriodConfig = Field(default_factory=PeriodConfig)
    events: EventConfig = Field(default_factory=EventConfig)
