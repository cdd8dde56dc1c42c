"""Data models for the time clock application."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional


class ClockEventKind(str, Enum):
    IN = "in"
    OUT = "out"


class ActiveView(str, Enum):
    TODAY = "today"
    CALENDAR = "calendar"
    SUMMARY = "summary"
    PROFILE = "profile"


class SummaryPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class ClockEvent:
    """A single clock-in or clock-out recorded in the ledger."""

    kind: ClockEventKind
    timestamp: datetime


@dataclass(frozen=True)
class Session:
    """A worked interval rebuilt from a pair of ledger entries."""

    start: datetime
    end: datetime
    is_open: bool = False

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class CalendarCell:
    day_of_month: Optional[int]
    is_current_month: bool
    is_today: bool = False

    @property
    def is_padding(self) -> bool:
        return self.day_of_month is None


@dataclass
class DailyHours:
    day: str
    hours: float


@dataclass
class ChartSeries:
    """Parallel label/value lists handed to the chart renderer."""

    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
