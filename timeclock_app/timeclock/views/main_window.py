"""Main window and wxPython application wiring."""
from __future__ import annotations

import logging
from datetime import datetime

import wx

from timeclock_app.timeclock import __version__
from timeclock_app.timeclock.controllers import AppController, ConfigManager
from timeclock_app.timeclock.coordinator import CALENDAR_WIDGET, CHART_WIDGET
from timeclock_app.timeclock.models import ActiveView, ClockEvent
from timeclock_app.timeclock.timers import TickTimer
from timeclock_app.timeclock.views.calendar_view import CalendarWidget
from timeclock_app.timeclock.views.summary_view import SummaryPanel

LOGGER = logging.getLogger(__name__)
BACKGROUND = "#F6F7FB"
ACCENT = "#22D3EE"
TEXT_SECONDARY = "#4D4F57"

TAB_ORDER = (ActiveView.TODAY, ActiveView.CALENDAR, ActiveView.SUMMARY, ActiveView.PROFILE)
TAB_LABELS = {
    ActiveView.TODAY: "Today",
    ActiveView.CALENDAR: "Calendar",
    ActiveView.SUMMARY: "Summary",
    ActiveView.PROFILE: "Profile",
}


class TodayPanel(wx.Panel):
    """Live clock, worked total and the single clock in/out control."""

    def __init__(self, parent: wx.Window, controller: AppController):
        super().__init__(parent)
        self.controller = controller
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        sizer = wx.BoxSizer(wx.VERTICAL)
        self.clock_label = wx.StaticText(self, label="", style=wx.ALIGN_CENTER_HORIZONTAL)
        clock_font = self.clock_label.GetFont()
        clock_font.PointSize += 10
        self.clock_label.SetFont(clock_font)
        sizer.Add(self.clock_label, 0, wx.EXPAND | wx.ALL, 8)

        self.status_label = wx.StaticText(self, label="", style=wx.ALIGN_CENTER_HORIZONTAL)
        self.status_label.SetForegroundColour(TEXT_SECONDARY)
        sizer.Add(self.status_label, 0, wx.EXPAND | wx.ALL, 4)

        self.worked_label = wx.StaticText(self, label="", style=wx.ALIGN_CENTER_HORIZONTAL)
        worked_font = self.worked_label.GetFont()
        worked_font.PointSize += 4
        worked_font.MakeBold()
        self.worked_label.SetFont(worked_font)
        self.worked_label.SetForegroundColour(ACCENT)
        sizer.Add(self.worked_label, 0, wx.EXPAND | wx.ALL, 4)

        self.toggle_btn = wx.Button(self, label="")
        self.toggle_btn.SetMinSize((180, 44))
        self.toggle_btn.Bind(wx.EVT_BUTTON, self.on_toggle)
        sizer.Add(self.toggle_btn, 0, wx.ALL | wx.ALIGN_CENTER_HORIZONTAL, 10)
        self.SetSizer(sizer)

    def refresh(self) -> None:
        self.clock_label.SetLabel(self.controller.formatted_current_time())
        self.worked_label.SetLabel(f"Worked: {self.controller.formatted_worked_time()}")
        self.status_label.SetLabel("Clocked in" if self.controller.is_clocked_in() else "Clocked out")
        self.toggle_btn.SetLabel(self.controller.toggle_label())
        self.Layout()

    def on_toggle(self, event: wx.Event) -> None:
        self.controller.toggle()


class ProfilePanel(wx.Panel):
    def __init__(self, parent: wx.Window, controller: AppController):
        super().__init__(parent)
        self.controller = controller
        sizer = wx.BoxSizer(wx.VERTICAL)
        sizer.Add(wx.StaticText(self, label=f"Time Clock v{__version__}"), 0, wx.ALL, 6)
        config_file = controller.config_manager.config_file
        sizer.Add(wx.StaticText(self, label=f"Settings: {config_file}"), 0, wx.ALL, 6)
        export_btn = wx.Button(self, label="Export timesheet")
        export_btn.SetToolTip("Write sessions and daily totals to an Excel workbook")
        export_btn.Bind(wx.EVT_BUTTON, self.on_export)
        sizer.Add(export_btn, 0, wx.ALL, 6)
        self.SetSizer(sizer)

    def on_export(self, event: wx.Event) -> None:
        try:
            path = self.controller.export_timesheet()
            wx.MessageBox(f"Exported timesheet to {path}", "Export complete")
        except Exception as exc:  # pragma: no cover - UI path
            LOGGER.exception("Timesheet export failed")
            wx.MessageBox(
                f"Timesheet export failed.\n\n{exc}\nClose any open Excel file and verify write access.",
                "Export error",
                style=wx.ICON_ERROR,
            )


class TimeClockFrame(wx.Frame):
    def __init__(self, controller: AppController, config_manager: ConfigManager):
        cfg = config_manager.config
        super().__init__(None, title="Time Clock", size=(cfg.last_window_width, cfg.last_window_height))
        self.controller = controller
        self.config_manager = config_manager
        self._closed = False
        self.SetBackgroundColour(BACKGROUND)
        self._build_ui()

        controller.ledger.subscribe(self._on_ledger_event)
        coordinator = controller.coordinator
        coordinator.register_widget(CALENDAR_WIDGET, self._create_calendar, self._destroy_calendar)
        coordinator.register_widget(CHART_WIDGET, self.summary_panel.create_chart, self.summary_panel.destroy_chart)
        self.notebook.SetSelection(TAB_ORDER.index(coordinator.active_view))

        self.ticker = TickTimer(self._on_tick, clock=controller.clock, interval=cfg.tick_interval_seconds)
        self.ticker.start()
        self.Bind(wx.EVT_CLOSE, self.on_close)

    def _build_ui(self) -> None:
        self.notebook = wx.Notebook(self)
        self.today_panel = TodayPanel(self.notebook, self.controller)
        self.calendar_host = wx.Panel(self.notebook)
        self.calendar_host.SetSizer(wx.BoxSizer(wx.VERTICAL))
        self.summary_panel = SummaryPanel(self.notebook, self.controller)
        self.profile_panel = ProfilePanel(self.notebook, self.controller)
        pages = {
            ActiveView.TODAY: self.today_panel,
            ActiveView.CALENDAR: self.calendar_host,
            ActiveView.SUMMARY: self.summary_panel,
            ActiveView.PROFILE: self.profile_panel,
        }
        for view in TAB_ORDER:
            self.notebook.AddPage(pages[view], TAB_LABELS[view])
        self.notebook.Bind(wx.EVT_NOTEBOOK_PAGE_CHANGED, self.on_page_changed)

    def _create_calendar(self) -> CalendarWidget:
        widget = CalendarWidget(self.calendar_host, self.controller)
        self.calendar_host.GetSizer().Add(widget, 1, wx.EXPAND)
        self.calendar_host.Layout()
        return widget

    def _destroy_calendar(self, widget: CalendarWidget) -> None:
        widget.Destroy()

    def on_page_changed(self, event: wx.BookCtrlEvent) -> None:
        view = TAB_ORDER[event.GetSelection()]
        self.controller.select_view(view)
        if view is ActiveView.SUMMARY:
            self.summary_panel.refresh()
        event.Skip()

    def _on_tick(self, now: datetime) -> None:
        wx.CallAfter(self._apply_tick, now)

    def _apply_tick(self, now: datetime) -> None:
        if self._closed:
            return
        self.controller.tick(now)
        self.today_panel.refresh()
        if (
            self.controller.coordinator.active_view is ActiveView.SUMMARY
            and self.config_manager.config.summary_source == "ledger"
        ):
            self.summary_panel.refresh()

    def _on_ledger_event(self, event: ClockEvent) -> None:
        if not self._closed:
            self.today_panel.refresh()

    def on_close(self, event: wx.CloseEvent) -> None:  # type: ignore[override]
        self._closed = True
        self.ticker.stop()
        self.controller.ledger.unsubscribe(self._on_ledger_event)
        self.controller.coordinator.close()
        self.controller.save_config(tuple(self.GetSize()))
        event.Skip()


class TimeClockApp(wx.App):
    def __init__(self, controller: AppController, config_manager: ConfigManager):
        self.controller = controller
        self.config_manager = config_manager
        super().__init__(clearSigInt=True)

    def OnInit(self) -> bool:  # type: ignore[override]
        self.frame = TimeClockFrame(self.controller, self.config_manager)
        self.frame.Show()
        return True

    def run(self) -> None:
        self.MainLoop()
