"""Benford's Law detection modules."""

from .digits import (
    Histogram,
    leading_digit,
    count_tokens,
    tokenize,
    extract_leading_digit_histogram
)

from .chi_square import (
    ChiSquareResult,
    chi_square_test,
    chi_square_p_value
)

from .benford import (
    DEFAULT_ALPHA,
    DEFAULT_MIN_SAMPLE,
    Classification,
    TheoreticalDistribution,
    BenfordAssessment,
    BenfordClassifier,
    benford_percentage,
    validate_alpha,
    validate_min_sample
)

from .errors import (
    BenfordGateError,
    ConfigurationError,
    NumericalError
)

__all__ = [
    # Digit extraction
    "Histogram",
    "leading_digit",
    "count_tokens",
    "tokenize",
    "extract_leading_digit_histogram",
    # Goodness-of-fit
    "ChiSquareResult",
    "chi_square_test",
    "chi_square_p_value",
    # Benford's Law
    "DEFAULT_ALPHA",
    "DEFAULT_MIN_SAMPLE",
    "Classification",
    "TheoreticalDistribution",
    "BenfordAssessment",
    "BenfordClassifier",
    "benford_percentage",
    "validate_alpha",
    "validate_min_sample",
    # Errors
    "BenfordGateError",
    "ConfigurationError",
    "NumericalError",
]
