"""Tests for leading-digit extraction."""

from __future__ import annotations

import pytest

from detectors.digits import Histogram, count_tokens, extract_leading_digit_histogram, leading_digit, tokenize


def test_excluded_tokens_do_not_count() -> None:
    """Zero-led, signed, fractional and bare-zero tokens are skipped."""
    histogram = extract_leading_digit_histogram("0abc 0.5 -7 0 .9 +3 abc")

    assert histogram.counts == (0,) * 9
    assert histogram.sample_size == 0


def test_digit_led_tokens_increment_their_bucket() -> None:
    """Only the first character decides the bucket."""
    histogram = extract_leading_digit_histogram("7 7.5 789xyz")

    assert histogram[6] == 3
    assert histogram.digit_count(7) == 3
    assert histogram.sample_size == 3


@pytest.mark.parametrize("text", ["", "   ", "\t\n \r\n"])
def test_empty_input_yields_zero_histogram(text: str) -> None:
    """Empty or whitespace-only text has no observations."""
    assert extract_leading_digit_histogram(text) == Histogram()


def test_whitespace_runs_are_single_delimiters() -> None:
    """Leading, trailing and repeated whitespace create no empty tokens."""
    histogram = extract_leading_digit_histogram("  \t1\n\n2   22\t\t9  ")

    assert histogram.counts == (1, 2, 0, 0, 0, 0, 0, 0, 1)
    assert count_tokens("  \t1\n\n2   22\t\t9  ") == 4


def test_non_ascii_digits_are_ignored() -> None:
    """Only ASCII 1-9 count as leading digits."""
    assert leading_digit("٣") is None
    assert leading_digit("３") is None
    assert leading_digit("3") == 3
    assert leading_digit("") is None


def test_sample_never_exceeds_token_count() -> None:
    """Equality holds only when every token starts with 1-9."""
    mixed = "12 apples and 0 pears cost 4.50 or -3"
    clean = "12 4.50 9 31 5e3"

    assert extract_leading_digit_histogram(mixed).sample_size < count_tokens(mixed)
    assert extract_leading_digit_histogram(clean).sample_size == count_tokens(clean)


def test_extraction_is_deterministic() -> None:
    """Repeated extraction gives identical histograms."""
    text = "31 4 15 92 65 35 89 79 3 23 84"

    assert extract_leading_digit_histogram(text) == extract_leading_digit_histogram(text)


def test_histogram_rejects_bad_shapes() -> None:
    """Histograms need nine non-negative counts."""
    with pytest.raises(ValueError):
        Histogram((1, 2, 3))
    with pytest.raises(ValueError):
        Histogram((0, 0, 0, 0, -1, 0, 0, 0, 0))


def test_proportions() -> None:
    """Proportions sum to one and are zero for an empty sample."""
    histogram = Histogram((2, 1, 1, 0, 0, 0, 0, 0, 0))

    assert histogram.proportions()[1] == pytest.approx(0.5)
    assert sum(histogram.proportions().values()) == pytest.approx(1.0)
    assert set(Histogram().proportions().values()) == {0.0}


def test_unicode_spaces_do_not_split_tokens() -> None:
    """NBSP, ideographic space and line separators stay inside a token."""
    text = "$ 500 EUR 9 x　7 y 1"

    assert extract_leading_digit_histogram(text).sample_size == 0
    assert count_tokens(text) == 4


def test_ascii_control_whitespace_splits_tokens() -> None:
    """Vertical tab, form feed and carriage return are delimiters."""
    histogram = extract_leading_digit_histogram("\x0b1\x0c2\r3\r\n4 ")

    assert histogram.counts == (1, 1, 1, 1, 0, 0, 0, 0, 0)
    assert tokenize("\x0b1\x0c2\r3\r\n4 ") == ["1", "2", "3", "4"]


@pytest.mark.parametrize("counts", [[1.7] * 9, [0, 0, 0, 0, -0.5, 0, 0, 0, 0], ["1"] * 9, [True] * 9])
def test_histogram_rejects_non_integer_counts(counts: list) -> None:
    """Counts are never truncated or coerced."""
    with pytest.raises(ValueError):
        Histogram(tuple(counts))
