"""Style utilities for consistent UI presentation."""
import streamlit as st

COLORS = {
    "secondary": "#6C757D",
    "success": "#28A745",
    "warning": "#FFC107",
    "critical": "#DC3545",
    "light": "#F8F9FA",
}

STATUS_COLORS = {
    "valid": COLORS["success"],
    "request_failed": COLORS["warning"],
    "malformed": COLORS["critical"],
}

STATUS_LABELS = {
    "valid": "Analyzed",
    "request_failed": "No AI advice",
    "malformed": "Rejected",
}


def status_badge(status: str) -> str:
    """Return HTML for a per-file status badge."""
    color = STATUS_COLORS.get(status, COLORS["secondary"])
    label = STATUS_LABELS.get(status, status.replace("_", " ").title())
    return f'<span style="background: {color}; color: white; padding: 2px 8px; border-radius: 12px; font-size: 0.8em;">{label}</span>'


def risk_metric(label: str, value: str, high: bool):
    """Render the risk percentage as a styled metric."""
    color = COLORS["critical"] if high else COLORS["success"]
    st.markdown(f"""
<div style="padding: 12px; background: {COLORS['light']}; border-radius: 8px; margin-bottom: 8px;">
    <div style="font-size: 0.85em; color: {COLORS['secondary']}; margin-bottom: 4px;">{label}</div>
    <div style="font-size: 1.5em; font-weight: 600; color: {color};">{value}</div>
</div>
    """, unsafe_allow_html=True)
