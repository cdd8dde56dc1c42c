"""Excel export of reconstructed work sessions."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from timeclock_app.timeclock.models import Session
from timeclock_app.timeclock.sessions import format_duration
from timeclock_app.timeclock.summary import hours_per_day

LOGGER = logging.getLogger(__name__)


class TimesheetExporter:
    def __init__(self, export_path: Path):
        self.export_path = Path(export_path)
        self.export_path.parent.mkdir(parents=True, exist_ok=True)

    def build_frames(self, sessions: Sequence[Session]) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Session rows plus per-day totals; open sessions are marked as such."""
        sessions_df = pd.DataFrame(
            [
                (
                    session.start,
                    session.end,
                    round(session.duration.total_seconds() / 3600.0, 4),
                    format_duration(session.duration),
                    session.is_open,
                )
                for session in sessions
            ],
            columns=["Start", "End", "Hours", "Duration", "Open"],
        )
        daily_df = pd.DataFrame(
            sorted((day, round(hours, 4)) for day, hours in hours_per_day(sessions).items()),
            columns=["Date", "Hours"],
        )
        return sessions_df, daily_df

    def export(self, sessions: Sequence[Session], now: Optional[datetime] = None) -> Path:
        sessions_df, daily_df = self.build_frames(sessions)
        with pd.ExcelWriter(self.export_path, engine="openpyxl", mode="w") as writer:
            sessions_df.to_excel(writer, sheet_name="Sessions", index=False)
            daily_df.to_excel(writer, sheet_name="Daily", index=False)
            meta_df = pd.DataFrame(
                [[now or datetime.now(), len(sessions_df), round(daily_df["Hours"].sum(), 4)]],
                columns=["ExportedAt", "SessionCount", "TotalHours"],
            )
            meta_df.to_excel(writer, sheet_name="Meta", index=False)
        LOGGER.info("Exported timesheet to %s", self.export_path)
        return self.export_path
