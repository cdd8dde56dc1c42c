"""Controllers orchestrating the ledger, clock, views and exports."""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from .calendar_grid import generate_month_grid, month_title
from .coordinator import ViewCoordinator
from .ledger import Ledger, find_alternation_violation
from .models import (
    ActiveView,
    CalendarCell,
    ChartSeries,
    ClockEvent,
    ClockEventKind,
    Session,
    SummaryPeriod,
)
from .sessions import (
    compute_worked_duration,
    format_clock_time,
    format_duration,
    is_clocked_in,
    reconstruct_sessions,
)
from .summary import REFERENCE_WEEK, build_series, daily_hours_from_sessions, month_total
from .timers import DEFAULT_TICK_SECONDS, SystemClock

if TYPE_CHECKING:
    from reports.excel_export import TimesheetExporter

LOGGER = logging.getLogger(__name__)


CONFIG_DIR = Path.home() / ".time_clock"
CONFIG_FILE_NAME = "config.toml"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default_config.toml"

SUMMARY_SOURCES = ("reference", "ledger")


def _enum_or_default(enum_cls, raw, default):
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def _int_or_default(raw, default: int) -> int:
    if isinstance(raw, bool):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


@dataclass
class AppConfig:
    export_path: str = "timesheet.xlsx"
    tick_interval_seconds: float = DEFAULT_TICK_SECONDS
    last_window_width: int = 420
    last_window_height: int = 640
    last_view: ActiveView = ActiveView.TODAY
    summary_period: SummaryPeriod = SummaryPeriod.WEEKLY
    summary_source: str = "reference"
    strict_ledger: bool = False

    @classmethod
    def from_toml(cls, data: dict) -> "AppConfig":
        try:
            interval = float(data.get("tick_interval_seconds", DEFAULT_TICK_SECONDS))
        except (TypeError, ValueError):
            interval = DEFAULT_TICK_SECONDS
        if interval <= 0:
            interval = DEFAULT_TICK_SECONDS
        source = data.get("summary_source", "reference")
        strict = data.get("strict_ledger", False)
        return cls(
            export_path=data.get("export_path", "timesheet.xlsx"),
            tick_interval_seconds=interval,
            last_window_width=_int_or_default(data.get("last_window_width"), 420),
            last_window_height=_int_or_default(data.get("last_window_height"), 640),
            last_view=_enum_or_default(ActiveView, data.get("last_view"), ActiveView.TODAY),
            summary_period=_enum_or_default(SummaryPeriod, data.get("summary_period"), SummaryPeriod.WEEKLY),
            summary_source=source if source in SUMMARY_SOURCES else "reference",
            strict_ledger=strict if isinstance(strict, bool) else False,
        )

    def to_toml(self) -> str:
        lines = [
            f"export_path = \"{self.export_path}\"",
            f"tick_interval_seconds = {float(self.tick_interval_seconds)}",
            f"last_window_width = {self.last_window_width}",
            f"last_window_height = {self.last_window_height}",
            f"last_view = \"{self.last_view.value}\"",
            f"summary_period = \"{self.summary_period.value}\"",
            f"summary_source = \"{self.summary_source}\"",
            f"strict_ledger = {str(bool(self.strict_ledger)).lower()}",
        ]
        return "\n".join(lines) + "\n"


class ConfigManager:
    def __init__(self, config_dir: Path = CONFIG_DIR) -> None:
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / CONFIG_FILE_NAME
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config = self._load()

    def _load(self) -> AppConfig:
        if self.config_file.exists():
            with open(self.config_file, "rb") as fh:
                data = tomllib.load(fh)
                return AppConfig.from_toml(data)
        if DEFAULT_CONFIG_PATH.exists():
            with open(DEFAULT_CONFIG_PATH, "rb") as fh:
                config = AppConfig.from_toml(tomllib.load(fh))
        else:
            config = AppConfig()
        self.save(config)
        return config

    def save(self, config: Optional[AppConfig] = None) -> None:
        cfg = config or self.config
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(cfg.to_toml(), encoding="utf-8")
        LOGGER.info("Saved configuration to %s", self.config_file)


class AppController:
    """Caller-owned update loop over the ledger and the current instant.

    Every display value is pulled from ``(ledger.entries, now)``; ``tick``
    refreshes ``now`` and ``toggle`` appends to the ledger.
    """

    def __init__(
        self,
        ledger: Ledger,
        coordinator: ViewCoordinator,
        config_manager: ConfigManager,
        exporter: Optional[TimesheetExporter] = None,
        clock: Optional[SystemClock] = None,
    ) -> None:
        self.ledger = ledger
        self.coordinator = coordinator
        self.config_manager = config_manager
        self.exporter = exporter
        self.clock = clock or ledger.clock
        self.now: datetime = self.clock.now()
        self.ledger.subscribe(self._on_ledger_event)

    # Clock
    def tick(self, now: Optional[datetime] = None) -> datetime:
        self.now = now or self.clock.now()
        return self.now

    # Ledger
    def toggle(self) -> ClockEvent:
        self.tick()
        kind = ClockEventKind.OUT if self.is_clocked_in() else ClockEventKind.IN
        return self.ledger.append(kind)

    def _on_ledger_event(self, event: ClockEvent) -> None:
        self.now = max(self.now, event.timestamp)
        violation = find_alternation_violation(self.ledger.entries)
        if violation is not None:
            LOGGER.warning("Ledger corrupted at entry %s; session totals may be miscounted", violation)

    def is_clocked_in(self) -> bool:
        return is_clocked_in(self.ledger.entries)

    def sessions(self, now: Optional[datetime] = None) -> List[Session]:
        return reconstruct_sessions(self.ledger.entries, now or self.now)

    def worked_duration(self, now: Optional[datetime] = None) -> timedelta:
        return compute_worked_duration(self.ledger.entries, now or self.now)

    def formatted_worked_time(self, now: Optional[datetime] = None) -> str:
        return format_duration(self.worked_duration(now))

    def formatted_current_time(self, now: Optional[datetime] = None) -> str:
        return format_clock_time(now or self.now)

    def toggle_label(self) -> str:
        return "Clock out" if self.is_clocked_in() else "Clock in"

    # Calendar
    def month_grid(self, reference: Optional[date] = None) -> List[CalendarCell]:
        today = self.now.date()
        return generate_month_grid(reference or today, today)

    def month_title(self, reference: Optional[date] = None) -> str:
        return month_title(reference or self.now.date())

    # Summary
    def summary_series(self) -> ChartSeries:
        if self.config_manager.config.summary_source == "ledger":
            return build_series(daily_hours_from_sessions(self.sessions(), self.now.date()))
        return build_series(REFERENCE_WEEK)

    def monthly_hours(self, reference: Optional[date] = None) -> float:
        return month_total(self.sessions(), reference or self.now.date())

    # View selection
    def select_view(self, view: ActiveView) -> None:
        self.coordinator.select_view(view)
        self.config_manager.config.last_view = self.coordinator.active_view

    def select_summary_period(self, period: SummaryPeriod) -> None:
        self.coordinator.select_summary_period(period)
        self.config_manager.config.summary_period = self.coordinator.summary_period

    # Export
    def export_timesheet(self) -> Path:
        if self.exporter is None:
            raise RuntimeError("No timesheet exporter configured")
        return self.exporter.export(self.sessions(), now=self.now)

    def save_config(self, window_size: Optional[tuple[int, int]] = None) -> None:
        cfg = self.config_manager.config
        if window_size is not None:
            cfg.last_window_width, cfg.last_window_height = window_size
        self.config_manager.save(cfg)
