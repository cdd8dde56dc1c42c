from datetime import date, timedelta

import pytest

from timeclock_app.timeclock.controllers import AppConfig, AppController
from timeclock_app.timeclock.coordinator import CHART_WIDGET, ViewCoordinator
from timeclock_app.timeclock.ledger import Ledger
from timeclock_app.timeclock.models import ActiveView, ClockEventKind, SummaryPeriod


class DummyConfigManager:
    def __init__(self) -> None:
        self.config = AppConfig()
        self.saved = 0

    def save(self, config=None):
        self.config = config or self.config
        self.saved += 1


class DummyExporter:
    def __init__(self):
        self.calls = []

    def export(self, sessions, now=None):
        self.calls.append((sessions, now))
        return "timesheet.xlsx"


@pytest.fixture
def controller(clock):
    return AppController(Ledger(clock), ViewCoordinator(), DummyConfigManager(), exporter=DummyExporter())


def test_toggle_alternates_and_updates_label(controller, clock):
    assert controller.toggle_label() == "Clock in"
    assert controller.toggle().kind is ClockEventKind.IN
    assert controller.is_clocked_in()
    assert controller.toggle_label() == "Clock out"
    clock.advance(minutes=1)
    assert controller.toggle().kind is ClockEventKind.OUT
    assert not controller.is_clocked_in()


def test_display_strings_follow_ticks(controller, clock, t0):
    assert controller.formatted_worked_time() == "00h 00m 00s"
    controller.toggle()
    clock.advance(seconds=3661)
    assert controller.formatted_worked_time() == "00h 00m 00s"
    controller.tick()
    assert controller.formatted_worked_time() == "01h 01m 01s"
    assert controller.formatted_current_time() == "10:01:01"

    controller.toggle()
    clock.advance(hours=5)
    controller.tick()
    assert controller.formatted_worked_time() == "01h 01m 01s"
    assert controller.worked_duration(t0 + timedelta(days=1)) == timedelta(seconds=3661)


def test_corrupted_ledger_is_logged(controller, caplog):
    controller.ledger.append(ClockEventKind.OUT)
    assert "Ledger corrupted at entry 0" in caplog.text


def test_month_grid_uses_current_day(controller):
    cells = controller.month_grid()
    assert [c.day_of_month for c in cells if c.is_today] == [6]
    other = controller.month_grid(date(2024, 6, 1))
    assert not any(c.is_today for c in other)
    assert controller.month_title() == "May 2024"


def test_summary_series_reference_and_ledger(controller, clock):
    assert controller.summary_series().values[:2] == [8.0, 7.5]

    controller.config_manager.config.summary_source = "ledger"
    controller.toggle()
    clock.advance(hours=2)
    controller.toggle()
    series = controller.summary_series()
    assert series.values == [2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    assert controller.monthly_hours() == 2.0


def test_view_selection_updates_config(controller):
    controller.select_view(ActiveView.SUMMARY)
    controller.select_summary_period(SummaryPeriod.WEEKLY)
    assert controller.coordinator.widgets[CHART_WIDGET].is_active
    assert controller.config_manager.config.last_view is ActiveView.SUMMARY
    controller.save_config((800, 600))
    assert controller.config_manager.config.last_window_width == 800
    assert controller.config_manager.saved == 1


def test_export_passes_sessions(controller, clock):
    controller.toggle()
    clock.advance(minutes=30)
    controller.tick()
    assert controller.export_timesheet() == "timesheet.xlsx"
    sessions, now = controller.exporter.calls[0]
    assert sessions[0].is_open
    assert now == clock.now()


def test_export_without_exporter(clock):
    controller = AppController(Ledger(clock), ViewCoordinator(), DummyConfigManager())
    with pytest.raises(RuntimeError):
        controller.export_timesheet()
