"""Matplotlib rendering of the summary series (no GUI dependency)."""
from __future__ import annotations

import io

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .models import ChartSeries  # noqa: E402

BAR_COLOUR = "#22D3EE"
DPI = 100


def draw_series(ax, series: ChartSeries):
    """Draw one bar per entry; repeated labels such as two "T" days keep their own slot."""
    positions = range(len(series.labels))
    bars = ax.bar(positions, series.values, color=BAR_COLOUR)
    ax.set_xticks(positions, series.labels)
    ax.set_ylabel("Hours")
    ax.spines[["top", "right"]].set_visible(False)
    return bars


def render_series_png(series: ChartSeries, width: int, height: int) -> bytes:
    width, height = max(width, 200), max(height, 150)
    fig, ax = plt.subplots(figsize=(width / DPI, height / DPI), dpi=DPI)
    draw_series(ax, series)
    fig.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    return buf.getvalue()
