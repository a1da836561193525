"""
Benford Gate Configuration

Settings come from three places, in increasing priority:
- Built-in defaults (alpha 0.05, min-sample 5 in three-way mode)
- Environment / .env file (BENFORD_ALPHA, BENFORD_MIN_SAMPLE,
  BENFORD_STRICT_MINIMUM, BENFORD_MODE)
- Processor properties or CLI flags
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional
import os

from detectors import (
    DEFAULT_ALPHA,
    DEFAULT_MIN_SAMPLE,
    ConfigurationError,
    validate_alpha,
    validate_min_sample,
)


class RoutingMode(Enum):
    """Which set of relationships a processor exposes."""
    THREE_WAY = "three-way"  # conforming / non-conforming / insufficient sample
    TWO_WAY = "two-way"  # suspect / not suspect, no sample gate


_UNSET = object()
_ABSENT = {"", "none", "null", "off"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ClassifierConfig:
    """Caller-supplied classification settings."""
    alpha: float = DEFAULT_ALPHA
    min_sample: Optional[int] = field(default=_UNSET)  # type: ignore[assignment]
    strict_minimum: bool = True
    mode: RoutingMode = RoutingMode.THREE_WAY

    def __post_init__(self):
        if not isinstance(self.mode, RoutingMode):
            object.__setattr__(self, "mode", parse_mode(self.mode))
        if self.min_sample is _UNSET:
            default = DEFAULT_MIN_SAMPLE if self.mode is RoutingMode.THREE_WAY else None
            object.__setattr__(self, "min_sample", default)
        self.validate()

    def validate(self) -> "ClassifierConfig":
        """Raise ConfigurationError for out-of-range values (never clamps)."""
        object.__setattr__(self, "alpha", validate_alpha(self.alpha))
        validate_min_sample(self.min_sample)
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClassifierConfig":
        """
        Build a config from BENFORD_* environment variables.

        Call load_dotenv() first to pick up a .env file.
        """
        return cls(**env_settings(environ))

    @classmethod
    def from_properties(cls, properties: Mapping[str, str],
                        mode: RoutingMode = RoutingMode.THREE_WAY) -> "ClassifierConfig":
        """Build a config from processor properties ("alpha", "min-sample")."""
        kwargs = {"mode": mode}
        if properties.get("alpha") is not None:
            kwargs["alpha"] = parse_alpha(properties["alpha"])
        if "min-sample" in properties:
            kwargs["min_sample"] = parse_min_sample(properties["min-sample"])
        return cls(**kwargs)


def env_settings(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Parsed BENFORD_* settings that are actually present in the environment."""
    env = os.environ if environ is None else environ
    settings = {}

    if env.get("BENFORD_MODE"):
        settings["mode"] = parse_mode(env["BENFORD_MODE"])
    if env.get("BENFORD_ALPHA"):
        settings["alpha"] = parse_alpha(env["BENFORD_ALPHA"])
    if "BENFORD_MIN_SAMPLE" in env:
        settings["min_sample"] = parse_min_sample(env["BENFORD_MIN_SAMPLE"])
    if env.get("BENFORD_STRICT_MINIMUM"):
        settings["strict_minimum"] = parse_bool(env["BENFORD_STRICT_MINIMUM"], "BENFORD_STRICT_MINIMUM")

    return settings


def parse_alpha(raw: str) -> float:
    try:
        value = float(str(raw).strip())
    except ValueError:
        raise ConfigurationError(f"alpha is not a number: {raw!r}", {"alpha": raw})
    return validate_alpha(value)


def parse_min_sample(raw) -> Optional[int]:
    if raw is None or str(raw).strip().lower() in _ABSENT:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(f"min-sample is not an integer: {raw!r}", {"min_sample": raw})
    return validate_min_sample(value)


def parse_bool(raw: str, name: str) -> bool:
    value = str(raw).strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} is not a boolean: {raw!r}", {name: raw})


def parse_mode(raw) -> RoutingMode:
    try:
        return RoutingMode(str(raw).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in RoutingMode)
        raise ConfigurationError(f"Unknown routing mode {raw!r} (expected one of: {choices})",
                                 {"mode": raw})
