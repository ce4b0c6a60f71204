from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .config import load_settings
from .errors import EcgRiskError
from .ingest import PathFile
from .models import Batch, UserProfile
from .pipeline import RunContext, run_batch
from .render import EXPORT_FILENAME, save_trend
from .session import BatchSession
from .synth import assemble, render_report_markdown
from .utils import safe_filename, write_json

app = typer.Typer(add_completion=False, help="ECG heart-risk batch analysis (up to four single-row CSV files).")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-file progress")) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _write_plots(batch: Batch, plots_dir: Path) -> list[Optional[str]]:
    refs: list[Optional[str]] = []
    for i, block in enumerate(assemble(batch), start=1):
        if not block.chart_series:
            refs.append(None)
            continue
        fname = f"{i}_{safe_filename(Path(block.filename).stem)}_trend.png"
        save_trend(block.chart_series, plots_dir / fname, title=block.filename)
        refs.append(f"plots/{fname}")
    return refs


@app.command()
def analyze(
    files: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="CSV files; only the first four are analyzed"),
    name: str = typer.Option("", "--name", help="Name (optional)"),
    age: str = typer.Option("", "--age", help="Age"),
    gender: str = typer.Option("", "--gender", help="Gender (e.g. Male, Female, Other)"),
    history: str = typer.Option("", "--history", help="Medical history (optional)"),
    out: Path = typer.Option(Path("reports"), "--out", help="Directory for report artifacts"),
    pdf: bool = typer.Option(False, "--pdf/--no-pdf", help=f"Also write {EXPORT_FILENAME}"),
    model: Optional[str] = typer.Option(None, "--model", help="Override ECG_RISK_LLM_MODEL"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
):
    """
    Analyze ECG feature files and write report artifacts.

    Always writes:
      report.md, analysis_log.json, plots/<n>_<file>_trend.png
    With --pdf also writes ECG_Report.pdf.
    """
    try:
        settings = load_settings(model=model, request_timeout_s=timeout)
        profile = UserProfile(name=name, age=age, gender=gender, history=history)
        ctx = RunContext.create(profile=profile, settings=settings)

        out.mkdir(parents=True, exist_ok=True)
        session = BatchSession()
        plot_refs: list[Optional[str]] = []
        session.subscribe(lambda batch: plot_refs.extend(_write_plots(batch, out / "plots")))

        batch = run_batch([PathFile(p) for p in files], ctx, session=session)
        blocks = assemble(batch)

        for block in blocks:
            risk = block.risk_percentage_text or "n/a"
            typer.echo(f"{block.filename}: {block.status} (risk {risk})")

        report_md = out / "report.md"
        report_md.write_text(render_report_markdown(blocks, profile, plot_paths=plot_refs), encoding="utf-8")

        log_path = out / "analysis_log.json"
        write_json(
            log_path,
            {
                "run_id": batch.run_id,
                "created_at": ctx.created_at,
                "model": settings.model,
                "files_selected": len(files),
                "files_analyzed": len(batch.assessments),
                "assessments": [
                    {"filename": a.filename, "status": a.status, "error": getattr(a, "error", None)}
                    for a in batch.assessments
                ],
            },
        )

        typer.echo(f"Report: {report_md}")
        typer.echo(f"Log: {log_path}")

        if pdf:
            data = session.export()
            if data is None:
                typer.echo("Nothing to export.", err=True)
            else:
                pdf_path = out / EXPORT_FILENAME
                pdf_path.write_bytes(data)
                typer.echo(f"PDF: {pdf_path}")

        if any(a.status == "request_failed" for a in batch.assessments):
            typer.echo("WARNING: some narratives could not be retrieved; see analysis_log.json.", err=True)

    except EcgRiskError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
