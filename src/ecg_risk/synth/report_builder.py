from __future__ import annotations

from typing import Iterable, Optional

from ..models import (
    Batch,
    MalformedAssessment,
    ReportBlock,
    RequestFailedAssessment,
    UserProfile,
    ValidAssessment,
)


def format_risk_percentage(risk_score: float) -> str:
    """0.78 -> '78.0%'."""
    return f"{risk_score * 100:.1f}%"


def chart_series(values: Iterable[float]) -> tuple[tuple[int, float], ...]:
    """Pair every value with its 1-based position."""
    return tuple((i, float(v)) for i, v in enumerate(values, start=1))


def _block_for(assessment) -> ReportBlock:
    if isinstance(assessment, ValidAssessment):
        return ReportBlock(
            filename=assessment.filename,
            status=assessment.status,
            risk_score=assessment.risk_score,
            risk_percentage_text=format_risk_percentage(assessment.risk_score),
            chart_series=chart_series(assessment.values),
            narrative_text=assessment.narrative,
        )
    if isinstance(assessment, RequestFailedAssessment):
        return ReportBlock(
            filename=assessment.filename,
            status=assessment.status,
            risk_score=assessment.risk_score,
            risk_percentage_text=format_risk_percentage(assessment.risk_score),
            chart_series=chart_series(assessment.values),
            narrative_text=assessment.message,
        )
    if isinstance(assessment, MalformedAssessment):
        return ReportBlock(
            filename=assessment.filename,
            status=assessment.status,
            narrative_text=assessment.message,
        )
    raise TypeError(f"Unsupported assessment type: {type(assessment).__name__}")


def assemble(batch: Batch) -> list[ReportBlock]:
    """Project a batch into display-ready blocks, preserving batch order."""
    return [_block_for(a) for a in batch.assessments]


def render_report_markdown(
    blocks: list[ReportBlock],
    profile: Optional[UserProfile] = None,
    *,
    plot_paths: Optional[list[Optional[str]]] = None,
) -> str:
    """Render blocks as the report.md artifact written by the CLI.

    plot_paths, when given, is parallel to blocks and holds relative image
    paths (None for blocks without a chart).
    """

    lines: list[str] = []
    lines.append("# ECG Heart Risk Report\n")

    if profile is not None:
        lines.append("\n## Profile\n\n")
        lines.append(f"- Name: {profile.name or 'Anonymous'}\n")
        lines.append(f"- Age: {profile.age or 'n/a'}\n")
        lines.append(f"- Gender: {profile.gender or 'n/a'}\n")
        lines.append(f"- History: {profile.history or 'None'}\n")

    if not blocks:
        lines.append("\n_No files were analyzed._\n")
        return "".join(lines)

    for i, block in enumerate(blocks):
        lines.append(f"\n## {block.filename}\n\n")
        if block.risk_percentage_text is not None:
            lines.append(f"**Predicted risk:** {block.risk_percentage_text}\n\n")
        plot = plot_paths[i] if plot_paths and i < len(plot_paths) else None
        if plot:
            lines.append(f"![ECG waveform]({plot})\n\n")
        if block.status == "valid":
            lines.append("### AI analysis and advice\n\n")
            lines.append(block.narrative_text.rstrip() + "\n")
        else:
            lines.append(f"> {block.narrative_text}\n")

    return "".join(lines)
