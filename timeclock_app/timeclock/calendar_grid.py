"""Monday-first month grid for the calendar tab."""
from __future__ import annotations

import calendar
from datetime import date
from typing import List, Sequence

from .models import CalendarCell

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def generate_month_grid(reference_date: date, today: date) -> List[CalendarCell]:
    """Cells for the month containing ``reference_date``.

    Leading padding cells fill the week up to the first day of the month
    (``date.weekday()`` is already Monday based). No trailing padding is
    added, so the grid length is ``leading_blanks + days_in_month``.
    """
    year, month = reference_date.year, reference_date.month
    leading_blanks, days_in_month = calendar.monthrange(year, month)

    cells = [CalendarCell(day_of_month=None, is_current_month=False) for _ in range(leading_blanks)]
    for day in range(1, days_in_month + 1):
        is_today = (today.year, today.month, today.day) == (year, month, day)
        cells.append(CalendarCell(day_of_month=day, is_current_month=True, is_today=is_today))
    return cells


def shift_month(reference_date: date, months: int) -> date:
    """First day of the month ``months`` away from ``reference_date``."""
    index = reference_date.year * 12 + (reference_date.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_title(reference_date: date) -> str:
    return f"{calendar.month_name[reference_date.month]} {reference_date.year}"


def grid_rows(cells: Sequence[CalendarCell]) -> List[List[CalendarCell]]:
    """Split cells into week rows of seven; the final row may be short."""
    return [list(cells[i:i + 7]) for i in range(0, len(cells), 7)]
