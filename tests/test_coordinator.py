from timeclock_app.timeclock.coordinator import (
    CALENDAR_WIDGET,
    CHART_WIDGET,
    ViewCoordinator,
    WidgetLifecycle,
    WidgetState,
)
from timeclock_app.timeclock.models import ActiveView, SummaryPeriod


class FakeChart:
    def __init__(self):
        self.sizes = []
        self.disposed = False

    def resize(self, width, height):
        self.sizes.append((width, height))


def make_coordinator():
    built = {CALENDAR_WIDGET: [], CHART_WIDGET: []}
    torn = {CALENDAR_WIDGET: [], CHART_WIDGET: []}
    coordinator = ViewCoordinator()

    def register(name, factory):
        def build():
            instance = factory()
            built[name].append(instance)
            return instance

        coordinator.register_widget(name, build, torn[name].append)

    register(CALENDAR_WIDGET, object)
    register(CHART_WIDGET, FakeChart)
    return coordinator, built, torn


def test_lifecycle_construction_and_teardown_are_idempotent():
    created = []
    destroyed = []
    lifecycle = WidgetLifecycle("w", factory=lambda: created.append(1) or "widget", teardown=destroyed.append)
    assert lifecycle.state is WidgetState.ABSENT
    lifecycle.deactivate()
    assert destroyed == []
    assert lifecycle.activate() == "widget"
    assert lifecycle.activate() == "widget"
    assert created == [1]
    lifecycle.deactivate()
    lifecycle.deactivate()
    assert destroyed == ["widget"]
    assert lifecycle.instance is None


def test_defaults_and_selection_setters():
    coordinator = ViewCoordinator()
    assert coordinator.active_view is ActiveView.TODAY
    assert coordinator.summary_period is SummaryPeriod.WEEKLY
    coordinator.select_view(ActiveView.PROFILE)
    coordinator.select_summary_period("monthly")
    assert coordinator.active_view is ActiveView.PROFILE
    assert coordinator.summary_period is SummaryPeriod.MONTHLY


def test_calendar_built_once_per_visit():
    coordinator, built, torn = make_coordinator()
    assert built[CALENDAR_WIDGET] == []
    coordinator.select_view(ActiveView.CALENDAR)
    coordinator.select_view(ActiveView.CALENDAR)
    assert len(built[CALENDAR_WIDGET]) == 1
    coordinator.select_view(ActiveView.TODAY)
    assert torn[CALENDAR_WIDGET] == built[CALENDAR_WIDGET]
    coordinator.select_view(ActiveView.CALENDAR)
    assert len(built[CALENDAR_WIDGET]) == 2


def test_chart_requires_summary_view_and_weekly_period():
    coordinator, built, torn = make_coordinator()
    coordinator.select_view(ActiveView.SUMMARY)
    assert coordinator.widgets[CHART_WIDGET].is_active
    coordinator.select_summary_period(SummaryPeriod.MONTHLY)
    assert not coordinator.widgets[CHART_WIDGET].is_active
    assert len(torn[CHART_WIDGET]) == 1
    coordinator.select_summary_period(SummaryPeriod.WEEKLY)
    assert coordinator.widgets[CHART_WIDGET].is_active
    assert len(built[CHART_WIDGET]) == 2
    assert not coordinator.widgets[CALENDAR_WIDGET].is_active


def test_resize_only_reaches_active_chart():
    coordinator, built, _torn = make_coordinator()
    coordinator.notify_resize(100, 50)
    coordinator.select_view(ActiveView.SUMMARY)
    coordinator.notify_resize(640, 480)
    assert built[CHART_WIDGET][0].sizes == [(640, 480)]


def test_register_while_view_active_builds_immediately():
    coordinator = ViewCoordinator(active_view=ActiveView.CALENDAR)
    lifecycle = coordinator.register_widget(CALENDAR_WIDGET, lambda: "cal")
    assert lifecycle.instance == "cal"


def test_close_tears_everything_down():
    coordinator, _built, torn = make_coordinator()
    coordinator.select_view(ActiveView.SUMMARY)
    coordinator.close()
    assert len(torn[CHART_WIDGET]) == 1
    assert all(not w.is_active for w in coordinator.widgets.values())


def test_failing_factory_is_logged_and_left_absent(caplog):
    coordinator = ViewCoordinator()

    def broken():
        raise RuntimeError("renderer unavailable")

    coordinator.register_widget(CALENDAR_WIDGET, broken)
    coordinator.select_view(ActiveView.CALENDAR)
    lifecycle = coordinator.widgets[CALENDAR_WIDGET]
    assert coordinator.active_view is ActiveView.CALENDAR
    assert lifecycle.state is WidgetState.ABSENT
    assert lifecycle.instance is None
    assert "Failed to construct calendar widget" in caplog.text

    coordinator.select_view(ActiveView.TODAY)
    assert lifecycle.state is WidgetState.ABSENT
