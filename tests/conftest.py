"""Shared fixtures for Benford gate tests."""

from __future__ import annotations

import pytest

BENFORD_ENV = ("BENFORD_ALPHA", "BENFORD_MIN_SAMPLE", "BENFORD_STRICT_MINIMUM", "BENFORD_MODE")


@pytest.fixture(autouse=True)
def clean_benford_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's BENFORD_* variables out of every test."""
    for name in BENFORD_ENV:
        monkeypatch.delenv(name, raising=False)
