"""Chart and document rendering.

Both use matplotlib's object API (no pyplot state), so they are safe to call
from Streamlit script threads.
"""

from .pdf_export import EXPORT_FILENAME, export_report
from .trend import render_trend, save_trend, trend_png

__all__ = ["EXPORT_FILENAME", "export_report", "render_trend", "save_trend", "trend_png"]
