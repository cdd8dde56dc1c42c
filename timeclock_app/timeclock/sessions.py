"""Rebuild worked sessions and totals from ledger entries."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from .models import ClockEvent, ClockEventKind, Session


def reconstruct_sessions(entries: Sequence[ClockEvent], now: datetime) -> List[Session]:
    """Pair entries (0, 1), (2, 3), ... into sessions.

    Pairing follows index parity, not the ``kind`` of the closing entry. A pair
    whose opening entry is not IN is skipped. On an odd-length ledger the last
    session is open and ends at ``now``.
    """
    sessions: List[Session] = []
    for index in range(0, len(entries), 2):
        start = entries[index]
        if start.kind is not ClockEventKind.IN:
            continue
        if index + 1 < len(entries):
            sessions.append(Session(start.timestamp, entries[index + 1].timestamp))
        else:
            sessions.append(Session(start.timestamp, now, is_open=True))
    return sessions


def compute_worked_duration(entries: Sequence[ClockEvent], now: datetime) -> timedelta:
    total = timedelta(0)
    for session in reconstruct_sessions(entries, now):
        total += session.duration
    return total


def is_clocked_in(entries: Sequence[ClockEvent]) -> bool:
    return bool(entries) and entries[-1].kind is ClockEventKind.IN


def format_duration(duration: timedelta) -> str:
    """Render as ``HHh MMm SSs``; seconds are floored and hours never roll into days."""
    total_seconds = max(duration // timedelta(seconds=1), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}h {minutes:02d}m {seconds:02d}s"


def format_clock_time(instant: datetime) -> str:
    return f"{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}"
