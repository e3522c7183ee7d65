"""Hydrologic core formulas for HydroGuard.

Pure computational utilities (no I/O) for runoff, a single reservoir/river
time step and river status classification.

Units
-----
- Reservoir volumes are in Mcft (million cubic feet).
- Flows are in cusecs (cubic feet per second).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from hydroguard.errors import (
    InvalidConfiguration,
    InvalidInput,
    require_finite,
    require_non_negative,
)

__all__ = [
    "RUNOFF_SCALE",
    "SECONDS_PER_HOUR",
    "CUBIC_FEET_PER_MCFT",
    "BASE_RIVER_SHARE",
    "OVERFLOW_RELEASE_FACTOR",
    "WARNING_RATIO",
    "CRITICAL_RATIO",
    "RiverStatus",
    "Reservoir",
    "River",
    "TimeStepResult",
    "compute_runoff",
    "advance_time_step",
    "river_status",
]

RUNOFF_SCALE = 0.5
SECONDS_PER_HOUR = 3600
CUBIC_FEET_PER_MCFT = 1_000_000
# Share of inflow that always reaches the downstream river.
BASE_RIVER_SHARE = 0.2
# Emergency gate release added to the river when the reservoir overflows.
OVERFLOW_RELEASE_FACTOR = 1.5
WARNING_RATIO = 0.7
CRITICAL_RATIO = 0.9


class RiverStatus(str, Enum):
    NORMAL = "Normal"
    WARNING = "Warning"
    CRITICAL = "Critical"


def _require_capacity(name: str, value: float) -> float:
    try:
        value = require_finite(name, value)
    except InvalidInput as exc:
        raise InvalidConfiguration(str(exc)) from exc
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be > 0, got {value}")
    return value


def compute_runoff(rainfall_mm_hr: float, area_sq_km: float, efficiency_percent: float) -> int:
    """Runoff reaching the reservoir, in whole cusecs.

    runoff = floor(i * A * (efficiency / 100) * 0.5)

    `efficiency_percent` is expected in [0, 100] but is deliberately not
    clamped.
    """
    i = require_non_negative("rainfall_mm_hr", rainfall_mm_hr)
    A = require_non_negative("area_sq_km", area_sq_km)
    eff = require_non_negative("efficiency_percent", efficiency_percent)
    runoff = require_finite("runoff", i * A * (eff / 100) * RUNOFF_SCALE)
    return int(math.floor(runoff))


def river_status(current_flow: float, design_capacity: float) -> RiverStatus:
    """Classify a river from its flow / design capacity ratio.

    Plain thresholds, evaluated fresh on every call. There is no hysteresis,
    so a flow oscillating around 70 % or 90 % of design capacity flips status
    on each evaluation.
    """
    design_capacity = _require_capacity("design_capacity", design_capacity)
    ratio = require_finite("current_flow", current_flow) / design_capacity
    if ratio > CRITICAL_RATIO:
        return RiverStatus.CRITICAL
    if ratio > WARNING_RATIO:
        return RiverStatus.WARNING
    return RiverStatus.NORMAL


@dataclass(frozen=True)
class TimeStepResult:
    new_level: float
    new_flow: float
    overflow: bool
    pct_full: float

    def to_dict(self) -> dict:
        return {
            "newLevel": self.new_level,
            "newFlow": self.new_flow,
            "overflow": self.overflow,
            "pctFull": self.pct_full,
        }


def advance_time_step(
    capacity: float,
    current_level: float,
    river_design_capacity: float,
    river_current_flow: float,
    inflow_cusecs: float,
    hours: float,
) -> TimeStepResult:
    """Advance one reservoir and its downstream river by `hours`.

    The reservoir gains `inflow * 3600 * hours / 1e6` Mcft and is clamped at
    capacity. Surplus volume is not tracked separately: on overflow the river
    receives a fixed `1.5 * inflow` gate release on top of the usual
    `0.2 * inflow` share. The release is a binary event, not proportional to
    the surplus.

    Raises
    ------
    InvalidConfiguration
        If `capacity` or `river_design_capacity` is not strictly positive.
    InvalidInput
        If any per-step quantity is negative or not finite, the current
        level already exceeds capacity, or the resulting flow is too large
        to represent.
    """
    capacity = _require_capacity("capacity", capacity)
    _require_capacity("river_design_capacity", river_design_capacity)
    current_level = require_non_negative("current_level", current_level)
    river_current_flow = require_non_negative("river_current_flow", river_current_flow)
    inflow = require_non_negative("inflow_cusecs", inflow_cusecs)
    hours = require_non_negative("hours", hours)
    if current_level > capacity:
        raise InvalidInput(
            f"current_level {current_level} exceeds capacity {capacity}")

    inflow_volume_mcft = inflow * SECONDS_PER_HOUR * hours / CUBIC_FEET_PER_MCFT
    new_level = current_level + inflow_volume_mcft
    overflow = new_level > capacity
    if overflow:
        new_level = capacity

    new_flow = river_current_flow + inflow * BASE_RIVER_SHARE
    if overflow:
        new_flow += inflow * OVERFLOW_RELEASE_FACTOR

    new_level = require_finite("new_level", new_level)
    new_flow = require_finite("new_flow", new_flow)
    pct_full = new_level / capacity * 100
    return TimeStepResult(new_level=new_level, new_flow=new_flow,
                          overflow=overflow, pct_full=pct_full)


@dataclass(frozen=True)
class Reservoir:
    """Reservoir state for one simulation run.

    Capacity is a static city constant and is validated here, at construction,
    so a bad profile fails before any scenario runs.
    """
    id: str
    name: str
    capacity_mcft: float
    current_level_mcft: float
    inflow_cusecs: float = 0.0
    outflow_cusecs: float = 0.0
    river_id: str | None = None

    def __post_init__(self):
        _require_capacity(f"{self.id} capacity_mcft", self.capacity_mcft)
        level = require_non_negative(f"{self.id} current_level_mcft", self.current_level_mcft)
        if level > self.capacity_mcft:
            raise InvalidInput(
                f"{self.id} level {level} exceeds capacity {self.capacity_mcft}")
        require_non_negative(f"{self.id} inflow_cusecs", self.inflow_cusecs)
        require_non_negative(f"{self.id} outflow_cusecs", self.outflow_cusecs)

    @property
    def pct_full(self) -> float:
        return self.current_level_mcft / self.capacity_mcft * 100


@dataclass(frozen=True)
class River:
    """River state; `status` is always derived from the current flow."""
    id: str
    name: str
    design_capacity_cusecs: float
    current_flow_cusecs: float
    bottlenecks: tuple[str, ...] = ()

    def __post_init__(self):
        _require_capacity(f"{self.id} design_capacity_cusecs", self.design_capacity_cusecs)
        require_non_negative(f"{self.id} current_flow_cusecs", self.current_flow_cusecs)

    @property
    def status(self) -> RiverStatus:
        return river_status(self.current_flow_cusecs, self.design_capacity_cusecs)
