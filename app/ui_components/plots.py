"""Report block rendering for the ECG Heart Risk UI."""
from typing import Optional

import streamlit as st

from ecg_risk.models import ReportBlock
from ecg_risk.risk import HIGH_RISK
from style_utils import risk_metric, status_badge


def render_report_block(block: ReportBlock, chart_png: Optional[bytes]):
    """
    Render one file's block: title, risk, chart and narrative.

    Args:
        block: display-ready projection of one assessment
        chart_png: trend image produced after the batch was committed, or None
    """
    with st.container(border=True):
        st.markdown(f"### {block.filename} &nbsp; {status_badge(block.status)}", unsafe_allow_html=True)

        if block.status == "malformed":
            st.error(block.narrative_text)
            return

        if block.risk_percentage_text is not None:
            high = block.risk_score is not None and block.risk_score >= HIGH_RISK
            risk_metric("Predicted risk", block.risk_percentage_text, high)

        if chart_png is not None:
            st.image(chart_png, width="stretch")

        st.markdown("#### AI analysis and advice")
        if block.status == "request_failed":
            st.warning(block.narrative_text)
        else:
            st.markdown(block.narrative_text)
