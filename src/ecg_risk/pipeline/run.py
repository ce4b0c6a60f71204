from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..errors import NarrativeRequestError
from ..ingest import BatchFile, validate
from ..models import (
    Assessment,
    Batch,
    MalformedAssessment,
    RequestFailedAssessment,
    Sample,
    ValidAssessment,
)
from ..risk import score
from ..session import BatchSession
from ..synth.narrative import NarrativeClient, OpenAIChatClient, request_narrative
from .context import RunContext

logger = logging.getLogger(__name__)


def _read_sample(f: BatchFile) -> Sample:
    try:
        text = f.read_text()
    except OSError as e:
        logger.warning("Could not read %s: %s", f.name, e)
        text = ""
    return validate(text, filename=f.name)


def assess_file(f: BatchFile, ctx: RunContext, client: NarrativeClient) -> Assessment:
    """Validate, score and narrate one file.

    Malformed samples return before the client is touched. A failed
    narrative request is captured in the assessment rather than raised.
    """

    sample = _read_sample(f)
    if not sample.is_valid:
        return MalformedAssessment(filename=sample.filename)

    risk_score = score(sample.values)
    try:
        narrative = request_narrative(ctx.profile, sample.values, client=client)
    except NarrativeRequestError as e:
        logger.warning("Narrative request failed for %s: %s", sample.filename, e)
        return RequestFailedAssessment(
            filename=sample.filename,
            values=sample.values,
            risk_score=risk_score,
            error=str(e),
        )

    return ValidAssessment(
        filename=sample.filename,
        values=sample.values,
        risk_score=risk_score,
        narrative=narrative,
    )


def run_batch(
    files: Sequence[BatchFile],
    ctx: RunContext,
    *,
    client: Optional[NarrativeClient] = None,
    session: Optional[BatchSession] = None,
) -> Batch:
    """Run one upload action end to end.

    Files beyond settings.max_files are ignored. Files are processed one at
    a time in selection order; the session is busy from before the first
    read until the whole list is done. The returned batch is the one this
    run produced, which the session only applies if no newer run started.
    """

    session = session or BatchSession()
    client = client or OpenAIChatClient(ctx.settings)
    selected = list(files)[: ctx.settings.max_files]
    if len(files) > len(selected):
        logger.info("Ignoring %d file(s) beyond the first %d", len(files) - len(selected), ctx.settings.max_files)

    run_id = session.begin_run()
    logger.info("Run %d started with %d file(s)", run_id, len(selected))

    assessments: list[Assessment] = []
    try:
        for f in selected:
            assessment = assess_file(f, ctx, client)
            logger.info("Run %d: %s -> %s", run_id, assessment.filename, assessment.status)
            assessments.append(assessment)
    except Exception:
        session.abandon(run_id)
        raise

    batch = Batch(run_id=run_id, assessments=tuple(assessments))
    session.commit(run_id, batch.assessments)
    return batch
