import importlib.util

import pytest

if importlib.util.find_spec("matplotlib") is None:
    pytest.skip("matplotlib not installed", allow_module_level=True)

import matplotlib.pyplot as plt  # noqa: E402

from timeclock_app.timeclock.charts import draw_series, render_series_png  # noqa: E402
from timeclock_app.timeclock.summary import REFERENCE_WEEK, build_series  # noqa: E402


def test_reference_week_draws_seven_separate_bars():
    series = build_series(REFERENCE_WEEK)
    fig, ax = plt.subplots()
    try:
        bars = draw_series(ax, series)
        positions = [bar.get_x() for bar in bars]
        assert len(set(positions)) == 7
        assert [bar.get_height() for bar in bars] == series.values
        assert [tick.get_text() for tick in ax.get_xticklabels()] == series.labels
    finally:
        plt.close(fig)


def test_render_series_png_produces_image_bytes():
    png = render_series_png(build_series(REFERENCE_WEEK), 10, 10)
    assert png.startswith(b"\x89PNG")
