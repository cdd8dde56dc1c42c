"""Calendar tab rendering a precomputed month grid."""
from __future__ import annotations

from datetime import date
from typing import Optional

import wx

from timeclock_app.timeclock.calendar_grid import WEEKDAY_LABELS, grid_rows, shift_month
from timeclock_app.timeclock.controllers import AppController

TODAY_COLOUR = "#22D3EE"
MUTED = "#8A8C93"


class CalendarWidget(wx.Panel):
    """Month view with prev/next/today navigation; built only while visible."""

    def __init__(self, parent: wx.Window, controller: AppController):
        super().__init__(parent)
        self.controller = controller
        self.reference: date = controller.now.date().replace(day=1)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        main = wx.BoxSizer(wx.VERTICAL)
        toolbar = wx.BoxSizer(wx.HORIZONTAL)
        for label, handler in (("<", self.on_prev), (">", self.on_next)):
            btn = wx.Button(self, label=label, style=wx.BU_EXACTFIT)
            btn.Bind(wx.EVT_BUTTON, handler)
            toolbar.Add(btn, 0, wx.ALL, 2)
        self.title = wx.StaticText(self, label="", style=wx.ALIGN_CENTER_HORIZONTAL)
        title_font = self.title.GetFont()
        title_font.MakeBold()
        self.title.SetFont(title_font)
        toolbar.Add(self.title, 1, wx.ALL | wx.ALIGN_CENTER_VERTICAL, 4)
        today_btn = wx.Button(self, label="Today")
        today_btn.Bind(wx.EVT_BUTTON, self.on_today)
        toolbar.Add(today_btn, 0, wx.ALL, 2)
        main.Add(toolbar, 0, wx.EXPAND)

        self.grid = wx.GridSizer(cols=7, vgap=4, hgap=4)
        main.Add(self.grid, 1, wx.EXPAND | wx.ALL, 6)
        self.SetSizer(main)

    def refresh(self, reference: Optional[date] = None) -> None:
        if reference is not None:
            self.reference = reference
        self.title.SetLabel(self.controller.month_title(self.reference))
        self.grid.Clear(delete_windows=True)
        for label in WEEKDAY_LABELS:
            header = wx.StaticText(self, label=label, style=wx.ALIGN_CENTER_HORIZONTAL)
            header.SetForegroundColour(MUTED)
            self.grid.Add(header, 0, wx.EXPAND)
        for row in grid_rows(self.controller.month_grid(self.reference)):
            for cell in row:
                label = "" if cell.is_padding else str(cell.day_of_month)
                text = wx.StaticText(self, label=label, style=wx.ALIGN_CENTER_HORIZONTAL)
                if cell.is_today:
                    font = text.GetFont()
                    font.MakeBold()
                    text.SetFont(font)
                    text.SetForegroundColour(TODAY_COLOUR)
                self.grid.Add(text, 0, wx.EXPAND)
        self.Layout()

    def on_prev(self, event: wx.Event) -> None:
        self.refresh(shift_month(self.reference, -1))

    def on_next(self, event: wx.Event) -> None:
        self.refresh(shift_month(self.reference, 1))

    def on_today(self, event: wx.Event) -> None:
        self.refresh(self.controller.now.date().replace(day=1))
