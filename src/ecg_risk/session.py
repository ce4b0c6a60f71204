from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Optional, Sequence

from .models import Assessment, Batch

logger = logging.getLogger(__name__)

BatchListener = Callable[[Batch], None]


class BatchSession:
    """
    Owner of the current batch and its busy flag.

    Each run takes a new, strictly increasing run id from begin_run(). Only
    the latest run may commit; results from superseded runs are discarded.
    Listeners are notified once per applied commit, after the new batch is
    visible, so chart rendering can follow the commit instead of guessing.
    A listener that raises is logged and skipped; the commit still stands.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._batch = Batch()
        self._busy = False
        self._latest_run_id = 0
        self._listeners: list[BatchListener] = []

    @property
    def batch(self) -> Batch:
        with self._lock:
            return self._batch

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._busy

    @property
    def current_run_id(self) -> int:
        with self._lock:
            return self._latest_run_id

    def begin_run(self) -> int:
        """Start a run: discard the previous batch and mark the session busy."""
        with self._lock:
            self._latest_run_id += 1
            self._batch = Batch()
            self._busy = True
            return self._latest_run_id

    def commit(self, run_id: int, assessments: Sequence[Assessment]) -> bool:
        """
        Apply a finished run's assessments.

        Returns False, leaving state untouched, when a newer run has started
        since run_id was issued.
        """
        with self._lock:
            if run_id != self._latest_run_id:
                logger.info("Discarding results of superseded run %d (latest is %d)", run_id, self._latest_run_id)
                return False
            batch = Batch(run_id=run_id, assessments=tuple(assessments))
            self._batch = batch
            self._busy = False
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(batch)
            except Exception:
                # The batch is already applied; remaining listeners still run.
                logger.exception("Batch listener %r failed for run %d", listener, run_id)
        return True

    def abandon(self, run_id: int) -> None:
        """Clear the busy flag after a run died without committing."""
        with self._lock:
            if run_id == self._latest_run_id:
                self._busy = False

    def subscribe(self, listener: BatchListener) -> Callable[[], None]:
        """Register a committed-batch listener; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def export(self) -> Optional[bytes]:
        """PDF bytes for the current batch, or None when there is nothing to export."""
        from .render.pdf_export import export_report
        from .synth.report_builder import assemble

        batch = self.batch
        if batch.is_empty:
            return None
        return export_report(assemble(batch))
