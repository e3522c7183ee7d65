"""Error taxonomy for the HydroGuard calculation core.

Structural problems (bad static configuration, negative or NaN quantities)
raise. Business outcomes such as an unfundable proposal are classified and
returned instead, see `hydroguard.domain.proposals`.
"""
from __future__ import annotations

import math

__all__ = [
    "HydroGuardError",
    "InvalidConfiguration",
    "InvalidInput",
    "require_finite",
    "require_non_negative",
]


class HydroGuardError(ValueError):
    """Base class for every error raised by the core."""


class InvalidConfiguration(HydroGuardError):
    """Static configuration cannot be simulated (e.g. zero capacity)."""


class InvalidInput(HydroGuardError):
    """A per-call input is structurally invalid (negative, NaN, out of range)."""


def require_finite(name: str, value: float) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite, got {value}")
    return value


def require_non_negative(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise InvalidInput(f"{name} must be >= 0, got {value}")
    return value
