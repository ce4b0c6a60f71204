"""Batch orchestration layer.

Sequences validation, scoring and narrative requests per selected file and
hands the finished batch to the session.
"""

from .context import RunContext
from .run import assess_file, run_batch

__all__ = ["RunContext", "assess_file", "run_batch"]
