from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import numpy as np
import pandas as pd

from .models import FEATURE_COUNT, Sample, SampleStatus

logger = logging.getLogger(__name__)


class BatchFile(Protocol):
    """What the batch orchestrator needs from a selected file."""

    name: str

    def read_text(self) -> str:
        ...


def decode_upload(data: bytes) -> str:
    """
    Decode uploaded bytes as UTF-8.

    A leading BOM is dropped and undecodable bytes are replaced, so a bad
    encoding surfaces later as a malformed sample rather than an exception.
    """
    return data.decode("utf-8-sig", errors="replace")


class PathFile:
    """A local CSV file selected on the command line."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.name

    def read_text(self) -> str:
        return decode_upload(self.path.read_bytes())


class UploadedFile:
    """
    Adapter for Streamlit's UploadedFile (anything with .name and .getvalue()).
    """

    def __init__(self, upload: Any):
        self._upload = upload
        self.name = str(getattr(upload, "name", "") or "upload.csv")

    def read_text(self) -> str:
        return decode_upload(bytes(self._upload.getvalue()))


def first_line(raw_text: str) -> str:
    """
    Return the first line of the stripped text; later lines are ignored.
    """
    lines = raw_text.strip().splitlines()
    return lines[0] if lines else ""


def parse_values(line: str) -> list[float]:
    """
    Split a line on commas and keep the tokens that coerce to finite numbers.

    Order is preserved; non-numeric, empty and non-finite tokens are dropped.
    """
    tokens = pd.Series([t.strip() for t in line.split(",")], dtype="object")
    numeric = pd.to_numeric(tokens, errors="coerce")
    numeric = numeric[np.isfinite(numeric.astype(float))]
    return [float(v) for v in numeric.tolist()]


def validate(raw_text: str, filename: str = "") -> Sample:
    """
    Turn raw file text into a Sample.

    Valid only when the first line yields exactly FEATURE_COUNT numbers;
    otherwise the sample is MALFORMED and carries no values.
    """
    values = parse_values(first_line(raw_text))
    if len(values) != FEATURE_COUNT:
        logger.info("Rejected %s: %d numeric values on first line", filename or "<input>", len(values))
        return Sample(filename=filename, status=SampleStatus.MALFORMED)
    return Sample(filename=filename, status=SampleStatus.VALID, values=tuple(values))
