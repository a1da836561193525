"""
Leading Digit Extraction

Turns raw document text into a first-digit histogram:
- Tokens are whitespace-delimited (any run of spaces, tabs, newlines)
- Only the first character of a token is inspected
- '1'-'9' count toward the histogram, everything else is skipped

Known limitation: signed or fractional values such as "-123" or "0.5" are
excluded, because their first character is not a nonzero digit.
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, Optional
import re


DIGITS = range(1, 10)
NONZERO_DIGITS = "123456789"

# Space, tab, newline, vertical tab, form feed, carriage return. NBSP and other
# Unicode spaces stay inside a token.
ASCII_WHITESPACE = " \t\n\x0b\f\r"
_WHITESPACE_RUN = re.compile(r"[ \t\n\x0b\f\r]+")


@dataclass(frozen=True)
class Histogram:
    """Counts of leading digits 1-9; index i holds digit i + 1."""
    counts: tuple[int, ...] = (0,) * 9

    def __post_init__(self):
        counts = tuple(self.counts)
        if any(isinstance(c, bool) or not isinstance(c, Integral) for c in counts):
            raise ValueError(f"Histogram counts must be integers: {counts}")
        counts = tuple(int(c) for c in counts)
        if len(counts) != 9:
            raise ValueError(f"Histogram needs 9 buckets, got {len(counts)}")
        if any(c < 0 for c in counts):
            raise ValueError(f"Histogram counts must be non-negative: {counts}")
        object.__setattr__(self, "counts", counts)

    def __iter__(self) -> Iterator[int]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __getitem__(self, index: int) -> int:
        return self.counts[index]

    @property
    def sample_size(self) -> int:
        return sum(self.counts)

    def digit_count(self, digit: int) -> int:
        """Count of tokens whose leading digit is `digit`."""
        if digit not in DIGITS:
            raise ValueError(f"Leading digit must be 1-9, got {digit}")
        return self.counts[digit - 1]

    def proportions(self) -> dict[int, float]:
        """Observed share of each digit (all zero for an empty sample)."""
        total = self.sample_size
        return {d: (self.counts[d - 1] / total if total else 0.0) for d in DIGITS}


def leading_digit(token: str) -> Optional[int]:
    """Return the leading digit of a token, or None if it doesn't count."""
    if token and token[0] in NONZERO_DIGITS:
        return int(token[0])
    return None


def tokenize(text: str) -> list[str]:
    """Split on runs of ASCII whitespace, dropping empty tokens."""
    return [t for t in _WHITESPACE_RUN.split(text.strip(ASCII_WHITESPACE)) if t]


def count_tokens(text: str) -> int:
    return len(tokenize(text))


def extract_leading_digit_histogram(text: str) -> Histogram:
    """
    Build the leading-digit histogram for a block of text.

    Args:
        text: Decoded document content

    Returns:
        Histogram of first digits across all tokens starting with 1-9
    """
    counts = [0] * 9
    for token in tokenize(text):
        digit = leading_digit(token)
        if digit:
            counts[digit - 1] += 1
    return Histogram(tuple(counts))
