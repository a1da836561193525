"""
Chi-squared goodness-of-fit test.

Thin wrapper over scipy so the classifier can treat the test as a pure
function of observed and expected frequencies.
"""

from dataclasses import dataclass
from typing import Sequence

from scipy.stats import chi2, chisquare


@dataclass(frozen=True)
class ChiSquareResult:
    """Outcome of a goodness-of-fit test."""
    statistic: float
    p_value: float
    degrees_of_freedom: int


def chi_square_p_value(statistic: float, degrees_of_freedom: int) -> float:
    """Upper-tail probability of `statistic` under chi-squared(df)."""
    if degrees_of_freedom < 1:
        raise ValueError(f"Degrees of freedom must be positive, got {degrees_of_freedom}")
    if statistic < 0:
        raise ValueError(f"Chi-square statistic cannot be negative, got {statistic}")
    return float(chi2.sf(statistic, degrees_of_freedom))


def chi_square_test(observed: Sequence[float], expected: Sequence[float]) -> ChiSquareResult:
    """
    Compare observed counts against expected counts.

    Expected counts must already be scaled to the observed total.

    Args:
        observed: Observed frequency per bucket
        expected: Expected frequency per bucket (all strictly positive)

    Returns:
        ChiSquareResult with df = buckets - 1
    """
    if len(observed) != len(expected):
        raise ValueError(f"Bucket count mismatch: {len(observed)} observed vs {len(expected)} expected")
    if len(observed) < 2:
        raise ValueError("Need at least two buckets for a goodness-of-fit test")
    if any(e <= 0 for e in expected):
        raise ValueError("Expected frequencies must be strictly positive")

    result = chisquare(list(observed), f_exp=list(expected))
    return ChiSquareResult(
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        degrees_of_freedom=len(observed) - 1,
    )
