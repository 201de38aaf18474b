"""Radar chart rasterisation with matplotlib (PNG output).

Figures are built with the object-oriented ``Figure`` API instead of
pyplot so that renders running in worker threads share no global state.
"""

from __future__ import annotations

import io
import math

from matplotlib.figure import Figure

from ai_culture_diagnostic.core.models import ChartSpec
from ai_culture_diagnostic.core.scale_mapper import SCALE_MAX, SCALE_MIN


def radar_figure(chart: ChartSpec) -> Figure:
    """Return a matplotlib Figure for a radar chart on the 1-4 scale."""
    if not chart.labels:
        raise ValueError("radar chart needs at least one label")
    for series in chart.series:
        if len(series.data) != len(chart.labels):
            raise ValueError("labels and series data must match length")

    count = len(chart.labels)
    angles = [n / float(count) * 2 * math.pi for n in range(count)]
    angles += angles[:1]

    fig = Figure(figsize=(6, 6))
    ax = fig.add_subplot(111, polar=True)
    ax.set_theta_offset(math.pi / 2)
    ax.set_theta_direction(-1)

    ax.set_thetagrids([a * 180 / math.pi for a in angles[:-1]], list(chart.labels))
    ax.set_ylim(0, SCALE_MAX)
    ax.set_yticks(range(SCALE_MIN, SCALE_MAX + 1))

    for series in chart.series:
        values = list(series.data) + [series.data[0]]
        ax.plot(angles, values, linewidth=2, color=chart.color, label=series.label)
        ax.fill(angles, values, alpha=0.2, color=chart.color)

    if chart.title:
        ax.set_title(chart.title, pad=20)
    if len(chart.series) > 1:
        ax.legend(loc="upper right", bbox_to_anchor=(1.2, 1.1))
    ax.grid(True)
    return fig


def render_radar_png(chart: ChartSpec, dpi: int = 120) -> bytes:
    """Render a chart spec to PNG bytes. Blocking; call from a worker thread."""
    fig = radar_figure(chart)
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight")
    return buffer.getvalue()
