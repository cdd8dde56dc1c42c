"""Summary tab with the weekly hours chart."""
from __future__ import annotations

import io
import logging

import wx

from timeclock_app.timeclock.charts import render_series_png
from timeclock_app.timeclock.controllers import AppController
from timeclock_app.timeclock.coordinator import CHART_WIDGET
from timeclock_app.timeclock.models import SummaryPeriod

LOGGER = logging.getLogger(__name__)


class WeeklyChart(wx.StaticBitmap):
    """Bar chart of the summary series, re-rendered on resize."""

    def __init__(self, parent: wx.Window, controller: AppController):
        super().__init__(parent)
        self.controller = controller
        width, height = parent.GetClientSize()
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        png = render_series_png(self.controller.summary_series(), width, height)
        buf = io.BytesIO(png)
        self.SetBitmap(wx.Bitmap(wx.Image(buf, wx.BITMAP_TYPE_PNG)))


class SummaryPanel(wx.Panel):
    def __init__(self, parent: wx.Window, controller: AppController):
        super().__init__(parent)
        self.controller = controller
        main = wx.BoxSizer(wx.VERTICAL)
        self.period_choice = wx.RadioBox(self, choices=["Weekly", "Monthly"], style=wx.RA_SPECIFY_COLS)
        self.period_choice.SetSelection(0 if controller.coordinator.summary_period is SummaryPeriod.WEEKLY else 1)
        self.period_choice.Bind(wx.EVT_RADIOBOX, self.on_period)
        main.Add(self.period_choice, 0, wx.ALL, 4)
        self.monthly_text = wx.StaticText(self, label="")
        main.Add(self.monthly_text, 0, wx.ALL, 6)
        self.chart_host = wx.Panel(self)
        self.chart_host.SetSizer(wx.BoxSizer(wx.VERTICAL))
        main.Add(self.chart_host, 1, wx.EXPAND | wx.ALL, 4)
        self.SetSizer(main)
        self.chart_host.Bind(wx.EVT_SIZE, self._on_resize)

    def on_period(self, event: wx.Event) -> None:
        period = SummaryPeriod.WEEKLY if self.period_choice.GetSelection() == 0 else SummaryPeriod.MONTHLY
        self.controller.select_summary_period(period)
        self.refresh()

    def refresh(self) -> None:
        if self.controller.coordinator.summary_period is SummaryPeriod.MONTHLY:
            self.monthly_text.SetLabel(
                f"{self.controller.month_title()}: {self.controller.monthly_hours():.1f}h worked"
            )
        else:
            self.monthly_text.SetLabel("")
            chart = self.controller.coordinator.widgets[CHART_WIDGET]
            if chart.is_active and chart.instance is not None:
                chart.instance.resize(*self.chart_host.GetClientSize())
        self.Layout()

    def create_chart(self) -> WeeklyChart:
        chart = WeeklyChart(self.chart_host, self.controller)
        self.chart_host.GetSizer().Add(chart, 1, wx.EXPAND)
        self.chart_host.Layout()
        return chart

    def destroy_chart(self, chart: WeeklyChart) -> None:
        chart.Destroy()

    def _on_resize(self, event: wx.SizeEvent) -> None:
        width, height = event.GetSize()
        try:
            self.controller.coordinator.notify_resize(width, height)
        except Exception:  # pragma: no cover - UI path
            LOGGER.exception("Chart resize failed")
        event.Skip()
