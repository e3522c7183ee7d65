"""Simulation utilities wrapping the hydrologic formulas into scenario runs.

Two entry points:

- `simulate_pair`: one reservoir/river pair driven by explicit parameters
  (what the `/simulate` endpoint exposes).
- `simulate_city`: a whole city profile under a what-if scenario. Rain runs
  the flood path (runoff + time step per reservoir); zero rain on dry soil
  runs the drought path, a separate multiplier table with no time step.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

from hydroguard.domain.cities import CityProfile
from hydroguard.domain.hydrology import (
    OVERFLOW_RELEASE_FACTOR,
    Reservoir,
    River,
    RiverStatus,
    TimeStepResult,
    advance_time_step,
    compute_runoff,
    river_status,
)
from hydroguard.domain.scenario import RiskLevel, ScenarioInput, classify_risk
from hydroguard.logger import get_logger

log = get_logger(__name__)

__all__ = [
    "SimulationMode",
    "Alert",
    "CitySnapshot",
    "simulate_pair",
    "simulate_city",
    "DROUGHT_LEVEL_MULTIPLIER",
    "DROUGHT_OUTFLOW_MULTIPLIER",
    "DROUGHT_INFLOW_MULTIPLIER",
    "DROUGHT_RIVER_MULTIPLIER",
]

# Drought path multipliers. Applied instead of the inflow/overflow arithmetic.
DROUGHT_LEVEL_MULTIPLIER = 0.6
DROUGHT_OUTFLOW_MULTIPLIER = 1.5
DROUGHT_INFLOW_MULTIPLIER = 0.1
DROUGHT_RIVER_MULTIPLIER = 0.2

FLASH_FLOOD_INTENSITY_MM_HR = 50
SURPLUS_PCT_FULL = 95


class SimulationMode(str, Enum):
    FLOOD = "flood"
    DROUGHT = "drought"
    IDLE = "idle"


@dataclass(frozen=True)
class Alert:
    id: str
    severity: str  # low | medium | high | critical
    title: str
    message: str
    location: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "severity": self.severity,
            "title": self.title,
            "message": self.message,
            "location": self.location,
        }


@dataclass(frozen=True)
class CitySnapshot:
    city_id: str
    mode: SimulationMode
    scenario: ScenarioInput
    runoff_cusecs: int
    reservoirs: Tuple[Reservoir, ...]
    rivers: Tuple[River, ...]
    overflowed: Tuple[str, ...]
    alerts: Tuple[Alert, ...]
    risk: RiskLevel

    @property
    def alerts_triggered(self) -> bool:
        return bool(self.alerts)

    def to_dict(self) -> dict:
        return {
            "city_id": self.city_id,
            "mode": self.mode.value,
            "scenario": self.scenario.to_dict(),
            "runoff_cusecs": self.runoff_cusecs,
            "risk": {"label": self.risk.label, "description": self.risk.description},
            "reservoirs": [{
                "id": r.id,
                "name": r.name,
                "capacityMcft": r.capacity_mcft,
                "currentLevelMcft": round(r.current_level_mcft, 3),
                "inflowCusecs": round(r.inflow_cusecs, 3),
                "outflowCusecs": round(r.outflow_cusecs, 3),
                "pctFull": round(r.pct_full, 3),
                "overflow": r.id in self.overflowed,
            } for r in self.reservoirs],
            "rivers": [{
                "id": r.id,
                "name": r.name,
                "designCapacityCusecs": r.design_capacity_cusecs,
                "currentFlowCusecs": round(r.current_flow_cusecs, 3),
                "status": r.status.value,
                "bottlenecks": list(r.bottlenecks),
            } for r in self.rivers],
            "alerts": [a.to_dict() for a in self.alerts],
            "alerts_triggered": self.alerts_triggered,
        }


def simulate_pair(
    rainfall_mm_hr: float,
    duration_hours: float,
    area_sq_km: float,
    efficiency_percent: float,
    capacity: float,
    current_level: float,
    river_design_capacity: float,
    river_current_flow: float,
    soil_saturation_percent: float = 50,
) -> Dict:
    """Runoff for one catchment fed through a single reservoir/river step.

    A drought scenario (no rain on dry soil) skips the time step and applies
    the drought multipliers to the level and river flow instead.
    """
    scenario = ScenarioInput(
        rainfall_intensity_mm_hr=rainfall_mm_hr,
        duration_hours=duration_hours,
        soil_saturation_percent=soil_saturation_percent,
    )
    runoff = compute_runoff(rainfall_mm_hr, area_sq_km, efficiency_percent)
    if scenario.is_drought:
        res = Reservoir("pair", "pair", capacity, current_level)
        river = River("pair", "pair", river_design_capacity, river_current_flow)
        new_level = res.current_level_mcft * DROUGHT_LEVEL_MULTIPLIER
        step = TimeStepResult(
            new_level=new_level,
            new_flow=river.current_flow_cusecs * DROUGHT_RIVER_MULTIPLIER,
            overflow=False,
            pct_full=new_level / res.capacity_mcft * 100,
        )
    else:
        step = advance_time_step(
            capacity, current_level, river_design_capacity, river_current_flow,
            runoff, duration_hours,
        )
    return {
        "runoff": runoff,
        **step.to_dict(),
        "riverStatus": river_status(step.new_flow, river_design_capacity).value,
    }


def _flood_path(profile: CityProfile, scenario: ScenarioInput, runoff: int):
    flows = {r.id: r.current_flow_cusecs for r in profile.rivers}
    design = {r.id: r.design_capacity_cusecs for r in profile.rivers}
    reservoirs: List[Reservoir] = []
    overflowed: List[str] = []
    # Reservoirs sharing a river are applied in table order, each step
    # starting from the flow left by the previous one.
    for res in profile.reservoirs:
        step = advance_time_step(
            res.capacity_mcft, res.current_level_mcft,
            design[res.river_id], flows[res.river_id],
            runoff, scenario.duration_hours,
        )
        flows[res.river_id] = step.new_flow
        outflow = res.outflow_cusecs
        if step.overflow:
            overflowed.append(res.id)
            outflow += runoff * OVERFLOW_RELEASE_FACTOR
        reservoirs.append(replace(res, current_level_mcft=step.new_level,
                                  inflow_cusecs=runoff, outflow_cusecs=outflow))
    rivers = [replace(r, current_flow_cusecs=flows[r.id]) for r in profile.rivers]
    return reservoirs, rivers, overflowed


def _drought_path(profile: CityProfile):
    reservoirs = [
        replace(
            res,
            current_level_mcft=min(res.capacity_mcft,
                                   res.current_level_mcft * DROUGHT_LEVEL_MULTIPLIER),
            inflow_cusecs=res.inflow_cusecs * DROUGHT_INFLOW_MULTIPLIER,
            outflow_cusecs=res.outflow_cusecs * DROUGHT_OUTFLOW_MULTIPLIER,
        )
        for res in profile.reservoirs
    ]
    rivers = [
        replace(r, current_flow_cusecs=r.current_flow_cusecs * DROUGHT_RIVER_MULTIPLIER)
        for r in profile.rivers
    ]
    return reservoirs, rivers


def _alerts(profile: CityProfile, scenario: ScenarioInput,
            reservoirs: List[Reservoir], rivers: List[River]) -> List[Alert]:
    alerts: List[Alert] = []
    if not scenario.is_active:
        return alerts
    intensity = scenario.rainfall_intensity_mm_hr
    if intensity > FLASH_FLOOD_INTENSITY_MM_HR:
        alerts.append(Alert(
            "sim-flood", "critical", "Flash Flood Warning",
            f"Rainfall intensity of {intensity:g}mm/hr is overwhelming drain capacity in {profile.name}.",
            "Citywide",
        ))
    for res in reservoirs:
        if res.pct_full > SURPLUS_PCT_FULL:
            alerts.append(Alert(
                f"sim-surplus-{res.id}", "high", f"{res.name} Surplus",
                f"Reservoir at {res.pct_full:.1f}% of capacity. Automated gate release impending.",
                res.name,
            ))
    for river in rivers:
        if river.status is RiverStatus.CRITICAL:
            alerts.append(Alert(
                f"sim-river-{river.id}", "high", f"{river.name} Critical Flow",
                f"Flow of {river.current_flow_cusecs:,.0f} cusecs exceeds 90% of design capacity.",
                river.name,
            ))
    if scenario.is_drought:
        alerts.append(Alert(
            "sim-drought-1", "critical", "Severe Water Scarcity",
            "Failed monsoon simulation. Reservoir levels dropping rapidly. "
            f"Soil saturation at {scenario.soil_saturation_percent:g}%.",
            "Citywide",
        ))
        alerts.append(Alert(
            "sim-drought-2", "medium", "Advisory: Supply Rationing",
            "Recommend cutting non-essential water supply to commercial zones.",
            "Metro Water",
        ))
    return alerts


def simulate_city(profile: CityProfile, scenario: ScenarioInput) -> CitySnapshot:
    """Run `scenario` against `profile` and return a fresh snapshot.

    The profile is never modified; each call recomputes from its base tables.
    """
    runoff = 0
    overflowed: List[str] = []
    if scenario.is_drought:
        mode = SimulationMode.DROUGHT
        reservoirs, rivers = _drought_path(profile)
    elif scenario.rainfall_intensity_mm_hr > 0:
        mode = SimulationMode.FLOOD
        runoff = compute_runoff(scenario.rainfall_intensity_mm_hr,
                                profile.catchment_area_sq_km,
                                profile.impervious_surface_percentage)
        reservoirs, rivers, overflowed = _flood_path(profile, scenario, runoff)
    else:
        mode = SimulationMode.IDLE
        reservoirs, rivers = list(profile.reservoirs), list(profile.rivers)

    alerts = _alerts(profile, scenario, reservoirs, rivers)
    log.debug("{} {} run: runoff={} overflowed={} alerts={}",
              profile.id, mode.value, runoff, overflowed, len(alerts))
    return CitySnapshot(
        city_id=profile.id,
        mode=mode,
        scenario=scenario,
        runoff_cusecs=runoff,
        reservoirs=tuple(reservoirs),
        rivers=tuple(rivers),
        overflowed=tuple(overflowed),
        alerts=tuple(alerts),
        risk=classify_risk(scenario, profile),
    )
