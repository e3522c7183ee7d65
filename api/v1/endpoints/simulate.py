"""FastAPI endpoint for running a single reservoir/river simulation step.

This module exposes a POST /simulate route that accepts:
- A rainfall intensity and duration for the scenario
- Catchment properties (area in sq km and runoff efficiency in percent)
- The reservoir (capacity, current level in Mcft) and its downstream river
  (design capacity, current flow in cusecs)

The endpoint converts rainfall to runoff, advances the reservoir and river by
one step and classifies the resulting river status. A drought request
(no rain, soil saturation below 20 %) takes the drought multiplier path
instead of the time step.

Notes
-----
- Zero or negative reservoir/river capacity is a configuration error and is
  answered with 422, as are negative levels and flows.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hydroguard.domain.simulation import simulate_pair

router = APIRouter()


class ReservoirInput(BaseModel):
    # Full capacity [Mcft]
    capacity: float = Field(..., examples=[3645])
    # Current stored volume [Mcft]
    currentLevel: float = Field(..., examples=[2850])


class RiverInput(BaseModel):
    # Design capacity [cusecs]
    designCapacity: float = Field(..., examples=[60000])
    # Current flow [cusecs]
    currentFlow: float = Field(..., examples=[15000])


class SimRequest(BaseModel):
    """Request body schema for the simulation endpoint.

    Attributes
    ----------
    rainfallIntensityMmHr:
        Rainfall intensity in millimeters per hour (>= 0).
    durationHours:
        Length of the time step in hours (> 0).
    soilSaturationPercent:
        Soil saturation in percent (0-100, default 50). With zero rainfall
        and saturation below 20 the request is a drought: the level and river
        flow are scaled by the drought multipliers instead of stepped.
    areaSqKm:
        Catchment area in square kilometers.
    efficiencyPercent:
        Share of rainfall that becomes runoff, in percent (not clamped).
    reservoir, river:
        Current state of the reservoir and its downstream river.
    """
    rainfallIntensityMmHr: float = Field(..., ge=0, examples=[15])
    durationHours: float = Field(..., gt=0, examples=[4])
    soilSaturationPercent: float = Field(50, ge=0, le=100, examples=[50])
    areaSqKm: float = Field(..., ge=0, examples=[426])
    efficiencyPercent: float = Field(..., ge=0, examples=[60])
    reservoir: ReservoirInput
    river: RiverInput


class SimResponse(BaseModel):
    runoff: int
    newLevel: float
    newFlow: float
    overflow: bool
    pctFull: float
    riverStatus: str


@router.post("/simulate", response_model=SimResponse)
def simulate(req: SimRequest):
    """Run runoff + one time step for the provided reservoir/river pair.

    Parameters
    ----------
    req : SimRequest
        Parsed and validated request body.

    Returns
    -------
    SimResponse
        New reservoir level, river flow, overflow flag, percent full and the
        river status after the step.
    """
    return simulate_pair(
        rainfall_mm_hr=req.rainfallIntensityMmHr,
        duration_hours=req.durationHours,
        area_sq_km=req.areaSqKm,
        efficiency_percent=req.efficiencyPercent,
        capacity=req.reservoir.capacity,
        current_level=req.reservoir.currentLevel,
        river_design_capacity=req.river.designCapacity,
        river_current_flow=req.river.currentFlow,
        soil_saturation_percent=req.soilSaturationPercent,
    )
