"""
Exceptions raised by the Benford gate.

The classification core does no I/O, so the taxonomy is small: bad
configuration is reported to the caller before any document is processed,
and numeric failures that should be impossible are surfaced as programming
errors rather than turned into labels.
"""

from typing import Any, Optional


class BenfordGateError(Exception):
    """Base exception for all Benford gate errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(BenfordGateError, ValueError):
    """Significance level or minimum sample size is out of range."""

    pass


class NumericalError(BenfordGateError):
    """The goodness-of-fit test produced an undefined result."""

    pass
