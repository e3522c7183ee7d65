"""Rescue-task prioritisation endpoint.

POST /prioritize scores a reported incident from water depth, location type
and affected population and returns the priority tier with its raw score.
Unknown location types score like a road.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hydroguard.domain.recovery import assess_task

router = APIRouter()


class PriorityRequest(BaseModel):
    depthFt: float = Field(..., examples=[6])
    locationType: str = Field("Other", examples=["Hospital"])
    populationAffected: float = Field(0, examples=[5000])


class PriorityResponse(BaseModel):
    tier: str
    score: int
    badge: str


@router.post("/prioritize", response_model=PriorityResponse)
def prioritize(req: PriorityRequest):
    task = assess_task(req.depthFt, req.locationType, req.populationAffected)
    return {**task.to_dict(), "badge": task.tier.badge}
