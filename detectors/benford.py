"""
Benford's Law Conformance Classification

Natural numeric data follows Benford's Law - first digits appear with
specific frequencies (1 appears ~30%, 9 appears ~5%). Fabricated or
manipulated documents often deviate from this distribution.

A document's leading-digit histogram is compared against the theoretical
distribution with a chi-squared goodness-of-fit test (df=8) and routed to
one of three outcomes:
- CONFORMING_SUFFICIENT_SAMPLE
- NON_CONFORMING_SUFFICIENT_SAMPLE
- INSUFFICIENT_SAMPLE
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence
import math

from .chi_square import chi_square_test
from .digits import DIGITS, Histogram
from .errors import ConfigurationError, NumericalError


DEFAULT_ALPHA = 0.05
DEFAULT_MIN_SAMPLE = 5


class Classification(Enum):
    """Routing outcome for a single document."""
    CONFORMING_SUFFICIENT_SAMPLE = "conforming_sufficient_sample"
    NON_CONFORMING_SUFFICIENT_SAMPLE = "non_conforming_sufficient_sample"
    INSUFFICIENT_SAMPLE = "insufficient_sample"


def benford_percentage(digit: int) -> float:
    """Expected share (in percent) of numbers starting with `digit`."""
    if digit not in DIGITS:
        raise ValueError(f"Leading digit must be 1-9, got {digit}")
    return 100 * math.log10(1 + 1 / digit)


@dataclass(frozen=True)
class TheoreticalDistribution:
    """Benford percentages for digits 1-9, computed once and never mutated."""
    percentages: tuple[float, ...]

    @classmethod
    def compute(cls) -> "TheoreticalDistribution":
        return cls(tuple(benford_percentage(d) for d in DIGITS))

    def __iter__(self):
        return iter(self.percentages)

    def __len__(self) -> int:
        return len(self.percentages)

    def __getitem__(self, index: int) -> float:
        return self.percentages[index]

    def expected_counts(self, sample_size: int) -> list[float]:
        """Scale the percentages so they sum to `sample_size`."""
        return [p / 100 * sample_size for p in self.percentages]


@dataclass(frozen=True)
class BenfordAssessment:
    """Classification plus the numbers behind it."""
    classification: Classification
    sample_size: int
    alpha: float
    min_sample: Optional[int]
    observed_counts: tuple[int, ...]
    expected_counts: tuple[float, ...] = field(default_factory=tuple)
    chi_square: Optional[float] = None
    p_value: Optional[float] = None
    most_deviant_digit: Optional[int] = None
    deviation_description: str = ""

    @property
    def tested(self) -> bool:
        return self.p_value is not None


def validate_alpha(alpha: float) -> float:
    try:
        value = float(alpha)
    except (TypeError, ValueError):
        raise ConfigurationError(f"alpha must be a number, got {alpha!r}", {"alpha": alpha})
    if math.isnan(value) or not 0 < value < 1:
        raise ConfigurationError("alpha must lie strictly between 0 and 1", {"alpha": alpha})
    return value


def validate_min_sample(min_sample: Optional[int]) -> Optional[int]:
    if min_sample is None:
        return None
    if isinstance(min_sample, bool) or not isinstance(min_sample, int):
        raise ConfigurationError(f"min_sample must be an integer, got {min_sample!r}",
                                 {"min_sample": min_sample})
    if min_sample < 0:
        raise ConfigurationError("min_sample cannot be negative", {"min_sample": min_sample})
    return min_sample


def _most_deviant(observed: Sequence[int], distribution: TheoreticalDistribution) -> tuple[int, str]:
    total = sum(observed)
    max_deviation = -1.0
    most_deviant = 1
    for digit in DIGITS:
        deviation = abs(observed[digit - 1] / total * 100 - distribution[digit - 1])
        if deviation > max_deviation:
            max_deviation = deviation
            most_deviant = digit

    obs_pct = observed[most_deviant - 1] / total * 100
    exp_pct = distribution[most_deviant - 1]
    direction = "overrepresented" if obs_pct > exp_pct else "underrepresented"
    return most_deviant, f"Digit {most_deviant} appears {obs_pct:.1f}% (expected {exp_pct:.1f}%) - {direction}"


class BenfordClassifier:
    """
    Chi-squared Benford conformance classifier.

    Holds one TheoreticalDistribution for its whole lifetime. Calls share no
    mutable state, so one instance can serve any number of threads.

    The minimum-sample gate is optional:
    - min_sample=N: fewer than N observations -> INSUFFICIENT_SAMPLE, no test
    - min_sample=None: always test (two-outcome deployments)

    A zero sample is INSUFFICIENT_SAMPLE regardless of the gate unless
    strict_minimum is turned off for legacy parity, in which case it is
    CONFORMING_SUFFICIENT_SAMPLE (an undefined p-value never falls below alpha).
    """

    def __init__(self, distribution: Optional[TheoreticalDistribution] = None):
        self.distribution = distribution or TheoreticalDistribution.compute()

    def evaluate(
        self,
        histogram: Histogram | Sequence[int],
        alpha: float = DEFAULT_ALPHA,
        min_sample: Optional[int] = None,
        strict_minimum: bool = True,
    ) -> BenfordAssessment:
        """
        Classify a histogram and keep the test diagnostics.

        Args:
            histogram: Leading-digit counts for digits 1-9
            alpha: Significance level for rejecting conformance
            min_sample: Minimum observations before the test runs (None = no gate)
            strict_minimum: Treat a zero sample as INSUFFICIENT_SAMPLE

        Returns:
            BenfordAssessment with the classification and test results
        """
        alpha = validate_alpha(alpha)
        min_sample = validate_min_sample(min_sample)
        if not isinstance(histogram, Histogram):
            histogram = Histogram(tuple(histogram))

        observed = histogram.counts
        sample_size = histogram.sample_size
        base = dict(alpha=alpha, min_sample=min_sample, sample_size=sample_size, observed_counts=observed)

        if min_sample is not None and sample_size < min_sample:
            return BenfordAssessment(
                classification=Classification.INSUFFICIENT_SAMPLE,
                deviation_description=f"{sample_size} leading digits, {min_sample} required",
                **base,
            )

        if sample_size == 0:
            if strict_minimum:
                return BenfordAssessment(
                    classification=Classification.INSUFFICIENT_SAMPLE,
                    deviation_description="No leading digits found",
                    **base,
                )
            return BenfordAssessment(
                classification=Classification.CONFORMING_SUFFICIENT_SAMPLE,
                deviation_description="No leading digits found - legacy routing",
                **base,
            )

        expected = self.distribution.expected_counts(sample_size)
        result = chi_square_test(observed, expected)
        if math.isnan(result.p_value) or math.isnan(result.statistic):
            raise NumericalError(
                "Chi-square test returned an undefined result",
                {"observed": observed, "expected": expected},
            )

        if result.p_value < alpha:
            classification = Classification.NON_CONFORMING_SUFFICIENT_SAMPLE
        else:
            classification = Classification.CONFORMING_SUFFICIENT_SAMPLE

        most_deviant, description = _most_deviant(observed, self.distribution)
        if classification is Classification.CONFORMING_SUFFICIENT_SAMPLE:
            description = "Distribution follows Benford's Law - no anomaly detected"

        return BenfordAssessment(
            classification=classification,
            expected_counts=tuple(expected),
            chi_square=result.statistic,
            p_value=result.p_value,
            most_deviant_digit=most_deviant,
            deviation_description=description,
            **base,
        )

    def classify(
        self,
        histogram: Histogram | Sequence[int],
        alpha: float = DEFAULT_ALPHA,
        min_sample: Optional[int] = None,
        strict_minimum: bool = True,
    ) -> Classification:
        """Classify a leading-digit histogram against Benford's Law."""
        return self.evaluate(histogram, alpha, min_sample, strict_minimum).classification
