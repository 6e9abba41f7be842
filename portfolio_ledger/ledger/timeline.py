"""Unified corporate-action and trade timeline construction."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Final, Union

from portfolio_ledger.domain import ForcedExitEvent, MergerEvent, SplitEvent, Transaction


class TimelineEventKind(str, Enum):
    """Tag identifying the source stream of one timeline event."""

    TX = "TX"
    SPLIT = "SPLIT"
    MERGER = "MERGER"
    EXIT = "EXIT"


# Same-day ordering: share-count changes first, forced exits last.
LEDGER_TIMELINE_KIND_PRIORITY: Final[dict[TimelineEventKind, int]] = {
    TimelineEventKind.SPLIT: 1,
    TimelineEventKind.MERGER: 2,
    TimelineEventKind.TX: 3,
    TimelineEventKind.EXIT: 4,
}

TimelinePayload = Union[Transaction, SplitEvent, MergerEvent, ForcedExitEvent]


@dataclass(frozen=True)
class TimelineEvent:
    """One tagged event in the unified replay timeline.

    Attributes:
        kind: Source stream tag.
        date: Effective event date used as primary sort key.
        payload: Original input record.
    """

    kind: TimelineEventKind
    date: date
    payload: TimelinePayload


def ledger_build_timeline(
    transactions: Sequence[Transaction],
    splits: Sequence[SplitEvent],
    mergers: Sequence[MergerEvent],
    exits: Sequence[ForcedExitEvent],
) -> list[TimelineEvent]:
    """Merge all input streams into one deterministically ordered timeline.

    Events are ordered by date, then by kind priority. The sort is stable, so
    equal-date events of the same kind keep their input order.

    Args:
        transactions: Recorded trades.
        splits: Discovered split events.
        mergers: Configured merger events.
        exits: Configured forced-exit events.

    Returns:
        list[TimelineEvent]: Sorted timeline events.

    Raises:
        TypeError: Raised when event dates are not mutually comparable.
    """

    timeline: list[TimelineEvent] = [
        *(TimelineEvent(kind=TimelineEventKind.TX, date=item.date, payload=item) for item in transactions),
        *(TimelineEvent(kind=TimelineEventKind.SPLIT, date=item.date, payload=item) for item in splits),
        *(TimelineEvent(kind=TimelineEventKind.MERGER, date=item.date, payload=item) for item in mergers),
        *(TimelineEvent(kind=TimelineEventKind.EXIT, date=item.date, payload=item) for item in exits),
    ]
    return sorted(timeline, key=lambda event: (event.date, LEDGER_TIMELINE_KIND_PRIORITY[event.kind]))


__all__ = [
    "LEDGER_TIMELINE_KIND_PRIORITY",
    "TimelineEvent",
    "TimelineEventKind",
    "TimelinePayload",
    "ledger_build_timeline",
]
