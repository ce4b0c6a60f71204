from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Number of feature values expected on the first line of every upload.
FEATURE_COUNT = 20

MALFORMED_MESSAGE = "Invalid file format: expected one row of 20 numeric values."
REQUEST_FAILED_MESSAGE = "AI recommendation could not be retrieved."


class SampleStatus(str, Enum):
    """
    Outcome of validating one uploaded file.

    - VALID: first line held exactly FEATURE_COUNT finite numbers
    - MALFORMED: anything else; the sample carries no values
    """
    VALID = "valid"
    MALFORMED = "malformed"


class UserProfile(BaseModel):
    """
    Operator-entered profile used to personalise the narrative prompt.

    Every field is optional text; age arrives from a number input but is
    kept as a string so an empty form stays representable.
    """
    name: str = ""
    age: str = ""
    gender: str = ""
    history: str = ""

    @field_validator("name", "age", "gender", "history", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        return str(v)


class Sample(BaseModel):
    """
    One uploaded file's first-line vector, or its rejection.
    """
    model_config = ConfigDict(frozen=True)

    filename: str
    status: SampleStatus
    values: tuple[float, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.status == SampleStatus.VALID


class ValidAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["valid"] = "valid"
    filename: str
    values: tuple[float, ...]
    risk_score: float
    narrative: str


class MalformedAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["malformed"] = "malformed"
    filename: str
    message: str = MALFORMED_MESSAGE


class RequestFailedAssessment(BaseModel):
    """
    A valid sample whose narrative request failed.

    The score is computed before the request, so it is kept alongside the
    fallback message and the captured error text.
    """
    model_config = ConfigDict(frozen=True)

    status: Literal["request_failed"] = "request_failed"
    filename: str
    values: tuple[float, ...]
    risk_score: float
    message: str = REQUEST_FAILED_MESSAGE
    error: str = ""


Assessment = Annotated[
    Union[ValidAssessment, MalformedAssessment, RequestFailedAssessment],
    Field(discriminator="status"),
]


class Batch(BaseModel):
    """
    Ordered per-file assessments produced by one upload action.

    run_id: identifier of the run that produced it (0 for the empty batch)
    assessments: one entry per processed file, in selection order
    """
    model_config = ConfigDict(frozen=True)

    run_id: int = 0
    assessments: tuple[Assessment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.assessments


class ReportBlock(BaseModel):
    """
    Display-ready projection of one assessment.

    chart_series holds (1-based index, value) pairs; it, risk_score and
    risk_percentage_text are None for malformed files.
    """
    model_config = ConfigDict(frozen=True)

    filename: str
    status: str
    risk_score: Optional[float] = None
    risk_percentage_text: Optional[str] = None
    chart_series: Optional[tuple[tuple[int, float], ...]] = None
    narrative_text: str = ""
