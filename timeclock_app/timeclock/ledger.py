"""Append-only log of clock events."""
from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .models import ClockEvent, ClockEventKind
from .timers import SystemClock

LOGGER = logging.getLogger(__name__)

Subscriber = Callable[[ClockEvent], None]


class LedgerIntegrityError(ValueError):
    """Raised by a strict ledger when an append would break IN/OUT alternation."""


def expected_kind(position: int) -> ClockEventKind:
    return ClockEventKind.IN if position % 2 == 0 else ClockEventKind.OUT


def find_alternation_violation(entries: Sequence[ClockEvent]) -> Optional[int]:
    """Return the index of the first entry out of IN/OUT order, if any."""
    for index, event in enumerate(entries):
        if event.kind is not expected_kind(index):
            return index
    return None


class Ledger:
    """Ordered sequence of clock events; entries are only ever appended.

    Timestamps come from the ledger's clock at append time, so entries are
    chronological by construction. Sessions are paired by index parity, which
    assumes strict alternation starting with IN. That is not enforced unless
    ``strict`` is set.
    """

    def __init__(self, clock: Optional[SystemClock] = None, strict: bool = False) -> None:
        self.clock = clock or SystemClock()
        self.strict = strict
        self._entries: List[ClockEvent] = []
        self._subscribers: List[Subscriber] = []

    @property
    def entries(self) -> Tuple[ClockEvent, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ClockEvent]:
        return iter(self.entries)

    @property
    def last(self) -> Optional[ClockEvent]:
        return self._entries[-1] if self._entries else None

    def append(self, kind: ClockEventKind) -> ClockEvent:
        kind = ClockEventKind(kind)
        if self.strict and kind is not expected_kind(len(self._entries)):
            raise LedgerIntegrityError(
                f"Cannot record {kind.value.upper()} at position {len(self._entries)}; "
                f"expected {expected_kind(len(self._entries)).value.upper()}"
            )
        event = ClockEvent(kind=kind, timestamp=self.clock.now())
        self._entries.append(event)
        LOGGER.info("Recorded clock %s at %s", kind.value, event.timestamp.isoformat(timespec="seconds"))
        self._notify(event)
        return event

    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self, event: ClockEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                LOGGER.exception("Ledger subscriber failed for %s event", event.kind.value)
