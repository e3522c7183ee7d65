"""City scenario endpoints.

Workflow:
1. GET /cities lists the built-in city profiles.
2. GET /scenarios/presets lists the named what-if scenarios.
3. POST /cities/{city_id}/simulate runs a scenario (request body, or a preset
   named in the `preset` query parameter) against the city's reservoirs and
   rivers, returning the projected state, river statuses and alerts. Exactly
   one of the two must be given; sending both is a 422.

An unknown city id is a 404; an unknown preset or out-of-range scenario is 422.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from hydroguard.domain.cities import CITIES, list_cities
from hydroguard.domain.scenario import PRESETS, ScenarioInput, get_preset
from hydroguard.domain.simulation import simulate_city
from hydroguard.logger import get_logger

log = get_logger(__name__)

router = APIRouter()


class ScenarioRequest(BaseModel):
    rainfallIntensityMmHr: float = Field(..., ge=0, examples=[65])
    durationHours: float = Field(..., gt=0, examples=[6])
    soilSaturationPercent: float = Field(..., ge=0, le=100, examples=[80])
    tideLevelMeters: float = Field(0.0, ge=0, examples=[2.5])

    def to_scenario(self) -> ScenarioInput:
        return ScenarioInput(
            rainfall_intensity_mm_hr=self.rainfallIntensityMmHr,
            duration_hours=self.durationHours,
            soil_saturation_percent=self.soilSaturationPercent,
            tide_level_meters=self.tideLevelMeters,
        )


@router.get("/cities")
def cities():
    return [profile.summary() for profile in list_cities()]


@router.get("/scenarios/presets")
def presets():
    return [
        {"id": preset_id, "label": label, **scenario.to_dict()}
        for preset_id, (label, scenario) in PRESETS.items()
    ]


@router.post("/cities/{city_id}/simulate")
def simulate_for_city(
    city_id: str,
    req: Optional[ScenarioRequest] = None,
    preset: Optional[str] = Query(None, description="Scenario preset id"),
):
    """Project a city's reservoirs and rivers under a what-if scenario.

    Raises
    ------
    HTTPException
        404 if the city is unknown, 422 unless exactly one of a body or a
        preset is given.
    """
    profile = CITIES.get(city_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Unknown city '{city_id}'")

    if preset and req is not None:
        raise HTTPException(
            status_code=422, detail="Provide either a scenario body or a preset, not both")
    if preset:
        scenario = get_preset(preset)
    elif req is not None:
        scenario = req.to_scenario()
    else:
        raise HTTPException(
            status_code=422, detail="Provide a scenario body or a preset query parameter")

    snapshot = simulate_city(profile, scenario)
    log.info("Simulated {} ({}): risk={} alerts={}",
             profile.id, snapshot.mode.value, snapshot.risk.label, len(snapshot.alerts))
    return snapshot.to_dict()
