"""Tab/segment selection state and lazy lifecycle of external widgets."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .models import ActiveView, SummaryPeriod

LOGGER = logging.getLogger(__name__)

CALENDAR_WIDGET = "calendar"
CHART_WIDGET = "chart"


class WidgetState(str, Enum):
    ABSENT = "absent"
    ACTIVE = "active"


class WidgetLifecycle:
    """ABSENT/ACTIVE state machine for one external renderer.

    ``activate`` constructs the widget through ``factory`` only when ABSENT and
    ``deactivate`` hands the instance to ``teardown`` only when ACTIVE, so at
    most one live instance exists at a time.
    """

    def __init__(
        self,
        name: str,
        factory: Optional[Callable[[], Any]] = None,
        teardown: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.name = name
        self.factory = factory
        self.teardown = teardown
        self.state = WidgetState.ABSENT
        self.instance: Any = None

    @property
    def is_active(self) -> bool:
        return self.state is WidgetState.ACTIVE

    def activate(self) -> Any:
        if self.is_active:
            return self.instance
        try:
            self.instance = self.factory() if self.factory else None
        except Exception:
            LOGGER.exception("Failed to construct %s widget", self.name)
            return None
        self.state = WidgetState.ACTIVE
        LOGGER.debug("Constructed %s widget", self.name)
        return self.instance

    def deactivate(self) -> None:
        if not self.is_active:
            return
        instance, self.instance = self.instance, None
        self.state = WidgetState.ABSENT
        if self.teardown:
            self.teardown(instance)
        LOGGER.debug("Tore down %s widget", self.name)


class ViewCoordinator:
    """Holds the active tab and summary period and keeps widgets in sync."""

    def __init__(
        self,
        active_view: ActiveView = ActiveView.TODAY,
        summary_period: SummaryPeriod = SummaryPeriod.WEEKLY,
    ) -> None:
        self.active_view = ActiveView(active_view)
        self.summary_period = SummaryPeriod(summary_period)
        self.widgets: Dict[str, WidgetLifecycle] = {
            CALENDAR_WIDGET: WidgetLifecycle(CALENDAR_WIDGET),
            CHART_WIDGET: WidgetLifecycle(CHART_WIDGET),
        }

    def register_widget(
        self,
        name: str,
        factory: Callable[[], Any],
        teardown: Optional[Callable[[Any], None]] = None,
    ) -> WidgetLifecycle:
        lifecycle = self.widgets.get(name)
        if lifecycle is None:
            lifecycle = self.widgets[name] = WidgetLifecycle(name)
        lifecycle.deactivate()
        lifecycle.factory = factory
        lifecycle.teardown = teardown
        self.sync()
        return lifecycle

    def select_view(self, view: ActiveView) -> None:
        self.active_view = ActiveView(view)
        LOGGER.info("Switched to %s view", self.active_view.value)
        self.sync()

    def select_summary_period(self, period: SummaryPeriod) -> None:
        self.summary_period = SummaryPeriod(period)
        LOGGER.info("Summary period set to %s", self.summary_period.value)
        self.sync()

    def wants(self, name: str) -> bool:
        if name == CALENDAR_WIDGET:
            return self.active_view is ActiveView.CALENDAR
        if name == CHART_WIDGET:
            return self.active_view is ActiveView.SUMMARY and self.summary_period is SummaryPeriod.WEEKLY
        return False

    def sync(self) -> None:
        for name, lifecycle in self.widgets.items():
            if self.wants(name):
                lifecycle.activate()
            else:
                lifecycle.deactivate()

    def notify_resize(self, width: int, height: int) -> None:
        chart = self.widgets[CHART_WIDGET]
        if chart.is_active and chart.instance is not None and hasattr(chart.instance, "resize"):
            chart.instance.resize(width, height)

    def close(self) -> None:
        for lifecycle in self.widgets.values():
            lifecycle.deactivate()
