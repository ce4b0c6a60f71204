from __future__ import annotations

import math
from typing import Sequence

# Two-level heuristic; a placeholder, not a trained model.
RISK_THRESHOLD = 0.35
HIGH_RISK = 0.78
LOW_RISK = 0.12


def mean(values: Sequence[float]) -> float:
    # fsum keeps the boundary comparison exact for inputs like [0.35] * 20.
    try:
        return math.fsum(values) / len(values)
    except OverflowError:
        # Huge finite values: a plain sum saturates to +/-inf.
        return sum(values) / len(values)


def score(values: Sequence[float]) -> float:
    """Map a validated feature vector to a risk probability.

    Returns HIGH_RISK when the mean is strictly above RISK_THRESHOLD,
    otherwise LOW_RISK (a mean equal to the threshold is low risk).
    """
    if not values:
        raise ValueError("Cannot score an empty feature vector.")
    return HIGH_RISK if mean(values) > RISK_THRESHOLD else LOW_RISK
