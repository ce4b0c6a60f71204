"""ECG Heart Risk AI - batch upload, scoring, AI advice and PDF export."""
import logging
import sys
from pathlib import Path

import streamlit as st

APP_DIR = Path(__file__).parent
SRC_DIR = APP_DIR.parent / "src"
for p in (APP_DIR, SRC_DIR):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from ecg_risk.config import load_settings
from ecg_risk.ingest import UploadedFile
from ecg_risk.models import Batch
from ecg_risk.pipeline import RunContext, run_batch
from ecg_risk.render import EXPORT_FILENAME, trend_png
from ecg_risk.session import BatchSession
from ecg_risk.synth import assemble
from llm_utils import get_openai_api_key, get_openai_base_url, render_missing_key_notice
from ui_components import render_page_header, render_profile_form, render_report_block, start_if_new_selection

st.set_page_config(
    page_title="ECG Heart Risk AI",
    page_icon="🫀",
    layout="centered"
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

LOGO_PATH = APP_DIR / "static" / "logo.png"


def get_session() -> BatchSession:
    """One BatchSession per browser session, created on first use."""
    if "batch_session" not in st.session_state:
        session = BatchSession()
        charts: dict[int, list] = {}

        def _render_charts(batch: Batch):
            # Runs after commit, once per applied batch; the display reads from here.
            charts.clear()
            charts[batch.run_id] = [
                trend_png(block.chart_series) if block.chart_series else None
                for block in assemble(batch)
            ]

        session.subscribe(_render_charts)
        st.session_state["batch_session"] = session
        st.session_state["batch_charts"] = charts
    return st.session_state["batch_session"]


def start_batch(session: BatchSession, uploads, profile):
    settings = load_settings(
        openai_api_key=get_openai_api_key(),
        openai_base_url=get_openai_base_url(),
    )
    if not settings.openai_api_key:
        render_missing_key_notice()
    ctx = RunContext.create(profile=profile, settings=settings)
    files = [UploadedFile(u) for u in uploads]
    with st.spinner("Analyzing, please wait..."):
        run_batch(files, ctx, session=session)


def render_export(session: BatchSession):
    batch = session.batch
    if batch.is_empty:
        return
    cache = st.session_state.setdefault("pdf_cache", {})
    if batch.run_id not in cache:
        cache.clear()
        cache[batch.run_id] = session.export()
    st.download_button(
        label="Export PDF report",
        data=cache[batch.run_id],
        file_name=EXPORT_FILENAME,
        mime="application/pdf",
        type="primary",
    )


def main():
    if LOGO_PATH.exists():
        st.image(str(LOGO_PATH), width=120)
    render_page_header()

    session = get_session()
    profile = render_profile_form()

    uploads = st.file_uploader(
        "ECG feature files (.csv)",
        type=["csv"],
        accept_multiple_files=True,
        key="ecg_uploads",
    )

    if uploads:
        max_files = load_settings().max_files
        if len(uploads) > max_files:
            st.info(f"{len(uploads)} files selected; only the first {max_files} will be analyzed.")
        start_if_new_selection(st.session_state, uploads, lambda: start_batch(session, uploads, profile))

    if session.busy:
        st.info("Analyzing, please wait...")
        return

    batch = session.batch
    charts = st.session_state.get("batch_charts", {}).get(batch.run_id, [])
    for i, block in enumerate(assemble(batch)):
        render_report_block(block, charts[i] if i < len(charts) else None)

    render_export(session)


if __name__ == "__main__":
    main()
