"""Synthesis layer.

Narrative requests against the inference service and the projection of a
committed batch into display-ready report blocks.
"""

from .narrative import (
    FALLBACK_NARRATIVE,
    NarrativeClient,
    OpenAIChatClient,
    build_prompt,
    request_narrative,
)
from .report_builder import assemble, format_risk_percentage, render_report_markdown

__all__ = [
    "FALLBACK_NARRATIVE",
    "NarrativeClient",
    "OpenAIChatClient",
    "assemble",
    "build_prompt",
    "format_risk_percentage",
    "render_report_markdown",
    "request_narrative",
]
