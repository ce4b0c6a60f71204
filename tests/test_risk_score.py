from __future__ import annotations

import pytest

from ecg_risk.risk import HIGH_RISK, LOW_RISK, RISK_THRESHOLD, mean, score


def test_constants_are_the_two_level_step() -> None:
    assert RISK_THRESHOLD == 0.35
    assert HIGH_RISK == 0.78
    assert LOW_RISK == 0.12


def test_mean_above_threshold_is_high_risk() -> None:
    assert score([0.5] * 20) == 0.78
    assert score([0.36] * 20) == 0.78


def test_mean_below_threshold_is_low_risk() -> None:
    assert score([0.1] * 20) == 0.12
    assert score([0.0] * 20) == 0.12
    assert score([-1.0] * 20) == 0.12


def test_mean_equal_to_threshold_is_low_risk() -> None:
    assert mean([0.35] * 20) == 0.35
    assert score([0.35] * 20) == 0.12
    assert score([0.0] * 10 + [0.7] * 10) == 0.12


def test_uses_the_mean_not_individual_values() -> None:
    # One large spike pulls the mean over the threshold.
    assert score([0.0] * 19 + [7.5]) == 0.78
    # Mixed values averaging exactly 0.25.
    assert score([0.0, 0.5] * 10) == 0.12


def test_score_is_deterministic() -> None:
    values = [0.1 * (i % 7) for i in range(20)]
    assert len({score(values) for _ in range(5)}) == 1


def test_empty_vector_is_rejected() -> None:
    with pytest.raises(ValueError):
        score([])


def test_huge_finite_values_do_not_overflow() -> None:
    assert score([1e308] * 20) == 0.78
    assert score([-1e308] * 20) == 0.12
