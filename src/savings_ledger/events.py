# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import collections
from typing import Literal

from pydantic import BaseModel

from savings_ledger.config import EventConfig

EventKind = Literal[
    "deposit",
    "withdraw",
    "budget_created",
    "expense_recorded",
    "goal_created",
    "goal_contribution",
    "goal_completed",
    "reward_claimed",
    "pool_funded",
]


class LedgerEvent(BaseModel, frozen=True):
    """
    An immutable record of one committed ledger transition.

    Attributes:
        sequence: Position of the event in the log, starting at 1.
        kind: What kind of transition was committed.
        principal: The caller the transition was applied for.
        amount: Value moved by the transition, 0 when none was moved.
        tick: Clock tick at which the transition committed.
        reference_id: Expense or goal id the transition refers to, if any.
    """

    sequence: int
    kind: EventKind
    principal: str
    amount: int = 0
    tick: int
    reference_id: int | None = None


class EventFilter(BaseModel, frozen=True):
    """
    Filter criteria for querying ledger events. All fields are AND-ed.

    Attributes:
        kind: Only include events of this kind.
        principal: Only include events for this principal.
        since_tick: Only include events at or after this tick.
        until_tick: Only include events before this tick.
        limit: Maximum number of events to return. 0 means no limit.
        offset: Number of events to skip before collecting results.
    """

    kind: EventKind | None = None
    principal: str | None = None
    since_tick: int | None = None
    until_tick: int | None = None
    limit: int = 0
    offset: int = 0


class EventQueryResult(BaseModel, frozen=True):
    """
    Result of an event query.

    Attributes:
        events: The matching events, ordered oldest-first.
        total_matched: Number of events that matched before pagination.
    """

    events: list[LedgerEvent]
    total_matched: int


class EventLog:
    """
    Records committed ledger transitions.

    Events are written only after a transition commits, so a rolled back
    operation never appears here. Storage is a bounded deque; when
    :attr:`~EventConfig.max_events` is reached the oldest event is evicted.

    Example::

        log = EventLog(EventConfig(max_events=1000))
        log.record("deposit", principal="alice", amount=500, tick=12)
        result = log.query(EventFilter(principal="alice"))
    """

    def __init__(self, config: EventConfig | None = None) -> None:
        self._config = config or EventConfig()
        self._events: collections.deque[LedgerEvent] = collections.deque(
            maxlen=self._config.max_events
        )
        self._sequence = 0

    def record(
        self,
        kind: EventKind,
        principal: str,
        tick: int,
        amount: int = 0,
        reference_id: int | None = None,
    ) -> LedgerEvent:
        """Append an event for a committed transition and return it."""
        self._sequence += 1
        event = LedgerEvent(
            sequence=self._sequence,
            kind=kind,
            principal=principal,
            amount=amount,
            tick=tick,
            reference_id=reference_id,
        )
        self._events.append(event)
        return event

    def query(self, event_filter: EventFilter | None = None) -> EventQueryResult:
        """Return events matching ``event_filter`` (all events when None)."""
        effective = event_filter or EventFilter()
        matched = [event for event in self._events if _event_matches(event, effective)]

        paginated = matched[effective.offset :]
        if effective.limit > 0:
            paginated = paginated[: effective.limit]

        return EventQueryResult(events=paginated, total_matched=len(matched))

    def count(self) -> int:
        """Return the number of retained events."""
        return len(self._events)

    def latest(self, n: int = 10) -> list[LedgerEvent]:
        """Return the ``n`` most recent events, most recent last."""
        if n < 1:
            raise ValueError(f"n must be >= 1; got {n}.")
        return list(self._events)[-n:]


def _event_matches(event: LedgerEvent, event_filter: EventFilter) -> bool:
    if event_filter.kind is not None and event.kind != event_filter.kind:
        return False
    if event_filter.principal is not None and event.principal != event_filter.principal:
        return False
    if event_filter.since_tick is not None and event.tick < event_filter.since_tick:
        return False
    if event_filter.until_tick is not None and event.tick >= event_filter.until_tick:
        return False
    return True
