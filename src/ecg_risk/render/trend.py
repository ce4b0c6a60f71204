from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Optional, Sequence

from matplotlib.figure import Figure

LINE_COLOR = "green"
SERIES_LABEL = "ECG waveform"


def draw_trend(ax: Any, series: Sequence[tuple[int, float]]) -> None:
    """Draw a line trend on an existing Axes, x labelled by 1-based index."""
    xs = [i for i, _ in series]
    ys = [v for _, v in series]
    ax.plot(xs, ys, color=LINE_COLOR, marker="o", markersize=3, linewidth=1.5, label=SERIES_LABEL)
    ax.set_xticks(xs)
    ax.tick_params(axis="both", labelsize=7)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right", fontsize=7)


def render_trend(series: Sequence[tuple[int, float]], *, title: Optional[str] = None) -> Figure:
    """Standalone trend figure for one report block."""
    fig = Figure(figsize=(7, 2.6))
    ax = fig.add_subplot(1, 1, 1)
    draw_trend(ax, series)
    if title:
        ax.set_title(title, fontsize=9)
    ax.set_xlabel("Feature index", fontsize=8)
    fig.tight_layout()
    return fig


def trend_png(series: Sequence[tuple[int, float]], *, title: Optional[str] = None, dpi: int = 110) -> bytes:
    fig = render_trend(series, title=title)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, bbox_inches="tight")
    return buf.getvalue()


def save_trend(series: Sequence[tuple[int, float]], path: Path, *, title: Optional[str] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(trend_png(series, title=title))
    return path
