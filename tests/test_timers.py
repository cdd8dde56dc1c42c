import time

import pytest

from timeclock_app.timeclock.timers import SystemClock, TickTimer


def test_tick_timer_invokes_callback_until_stopped():
    ticks = []
    timer = TickTimer(ticks.append, interval=0.1)
    timer.start()
    assert timer.start() is timer
    time.sleep(0.45)
    timer.stop()
    count = len(ticks)
    assert count >= 2, "tick callback should have been invoked"
    assert not timer.is_running
    time.sleep(0.25)
    assert len(ticks) == count


def test_tick_timer_context_manager_releases_thread():
    ticks = []
    with TickTimer(ticks.append, interval=0.05) as timer:
        time.sleep(0.2)
        assert timer.is_running
    assert not timer.is_running
    assert ticks


def test_tick_failures_do_not_stop_loop():
    calls = []

    def flaky(now):
        calls.append(now)
        raise RuntimeError("render failed")

    with TickTimer(flaky, interval=0.05):
        time.sleep(0.25)
    assert len(calls) >= 2


def test_tick_uses_supplied_clock(clock, t0):
    seen = []
    with TickTimer(seen.append, clock=clock, interval=0.05):
        time.sleep(0.15)
    assert seen and all(now == t0 for now in seen)


def test_invalid_interval():
    with pytest.raises(ValueError):
        TickTimer(lambda _now: None, interval=0)


def test_system_clock_returns_local_time():
    assert SystemClock().now().tzinfo is None
