"""UI components for the ECG Heart Risk app."""
from .header import render_page_header, render_profile_form
from .plots import render_report_block
from .uploads import start_if_new_selection, upload_signature

__all__ = [
    "render_page_header",
    "render_profile_form",
    "render_report_block",
    "start_if_new_selection",
    "upload_signature",
]
