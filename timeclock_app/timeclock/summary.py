"""Per-day hour series for the summary chart."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Sequence

from .models import ChartSeries, DailyHours, Session

WEEKDAY_INITIALS = ("M", "T", "W", "T", "F", "S", "S")

# Placeholder week shown until history is derived from the ledger.
REFERENCE_WEEK = (
    DailyHours("M", 8.0),
    DailyHours("T", 7.5),
    DailyHours("W", 8.2),
    DailyHours("T", 6.0),
    DailyHours("F", 8.0),
    DailyHours("S", 0.0),
    DailyHours("S", 0.0),
)


def build_series(daily_hours: Iterable[DailyHours]) -> ChartSeries:
    series = ChartSeries()
    for entry in daily_hours:
        series.labels.append(entry.day)
        series.values.append(entry.hours)
    return series


def _split_by_day(session: Session) -> Dict[date, float]:
    """Hours of ``session`` falling on each calendar day it touches."""
    hours: Dict[date, float] = {}
    cursor = session.start
    while cursor < session.end:
        next_midnight = datetime.combine(cursor.date() + timedelta(days=1), time.min)
        segment_end = min(next_midnight, session.end)
        hours[cursor.date()] = hours.get(cursor.date(), 0.0) + (segment_end - cursor).total_seconds() / 3600.0
        cursor = segment_end
    return hours


def hours_per_day(sessions: Iterable[Session]) -> Dict[date, float]:
    totals: Dict[date, float] = {}
    for session in sessions:
        for day, hours in _split_by_day(session).items():
            totals[day] = totals.get(day, 0.0) + hours
    return totals


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def daily_hours_from_sessions(sessions: Sequence[Session], week_of: date) -> List[DailyHours]:
    """Seven Monday-first entries for the week containing ``week_of``."""
    totals = hours_per_day(sessions)
    monday = week_start(week_of)
    return [
        DailyHours(WEEKDAY_INITIALS[offset], round(totals.get(monday + timedelta(days=offset), 0.0), 2))
        for offset in range(7)
    ]


def month_total(sessions: Sequence[Session], reference_date: date) -> float:
    totals = hours_per_day(sessions)
    return sum(
        hours
        for day, hours in totals.items()
        if (day.year, day.month) == (reference_date.year, reference_date.month)
    )
