from __future__ import annotations

import io
import textwrap
from typing import Sequence

from matplotlib.figure import Figure

from ..errors import ExportUnavailableError
from ..models import ReportBlock
from .trend import draw_trend

EXPORT_FILENAME = "ECG_Report.pdf"
REPORT_TITLE = "ECG Heart Risk AI Report"

# Layout in inches; the page height is the sum of what the blocks need.
PAGE_WIDTH = 8.27
MARGIN = 0.5
TITLE_H = 0.6
HEADING_H = 0.4
LINE_H = 0.19
CHART_H = 2.1
BLOCK_GAP = 0.35
WRAP_CHARS = 100


def _wrap(text: str) -> list[str]:
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        wrapped = textwrap.wrap(paragraph, width=WRAP_CHARS) or [""]
        lines.extend(wrapped)
    return lines


def _block_height(block: ReportBlock) -> float:
    h = HEADING_H
    if block.risk_percentage_text is not None:
        h += LINE_H * 1.5
    if block.chart_series:
        h += CHART_H + 0.2
    if block.status == "valid":
        h += HEADING_H
    h += LINE_H * len(_wrap(block.narrative_text))
    return h + BLOCK_GAP


def export_report(blocks: Sequence[ReportBlock]) -> bytes:
    """Render every block, in order, onto one PDF page sized to the content.

    Raises ExportUnavailableError when there is nothing to export.
    """
    if not blocks:
        raise ExportUnavailableError("Nothing to export: the batch is empty.")

    height = 2 * MARGIN + TITLE_H + sum(_block_height(b) for b in blocks)
    fig = Figure(figsize=(PAGE_WIDTH, height))

    def y(cursor: float) -> float:
        return 1.0 - cursor / height

    left = MARGIN / PAGE_WIDTH
    cursor = MARGIN
    fig.text(left, y(cursor), REPORT_TITLE, fontsize=16, fontweight="bold", va="top", parse_math=False)
    cursor += TITLE_H

    for block in blocks:
        fig.text(left, y(cursor), block.filename, fontsize=12, fontweight="bold", va="top", parse_math=False)
        cursor += HEADING_H

        if block.risk_percentage_text is not None:
            fig.text(left, y(cursor), f"Predicted risk: {block.risk_percentage_text}", fontsize=10, va="top", parse_math=False)
            cursor += LINE_H * 1.5

        if block.chart_series:
            ax = fig.add_axes(
                [
                    (MARGIN + 0.4) / PAGE_WIDTH,
                    y(cursor + CHART_H),
                    (PAGE_WIDTH - 2 * MARGIN - 0.5) / PAGE_WIDTH,
                    (CHART_H - 0.3) / height,
                ]
            )
            draw_trend(ax, block.chart_series)
            cursor += CHART_H + 0.2

        if block.status == "valid":
            fig.text(left, y(cursor), "AI analysis and advice", fontsize=11, fontweight="bold", va="top", parse_math=False)
            cursor += HEADING_H

        for line in _wrap(block.narrative_text):
            fig.text(left, y(cursor), line, fontsize=8.5, va="top", parse_math=False)
            cursor += LINE_H

        cursor += BLOCK_GAP

    buf = io.BytesIO()
    fig.savefig(buf, format="pdf")
    return buf.getvalue()
