"""Infrastructure proposal endpoints.

POST /validate-proposal classifies a drafted project by cost per impact point.
A proposal with non-positive cost or an impact score outside (0, 10] is not an
error: it comes back with `isValid: false` and tier "Invalid".

POST /proposals/metrics summarises a portfolio of plans (allocated and spent
budget for Active/Approved plans, average progress of Active plans).
"""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hydroguard.domain.proposals import portfolio_metrics, validate_proposal

router = APIRouter()


class ProposalRequest(BaseModel):
    costCr: float = Field(..., examples=[45])
    impactScore: float = Field(..., examples=[9])


class ProposalResponse(BaseModel):
    isValid: bool
    tier: str
    ratio: Optional[float]


class PlanRecord(BaseModel):
    status: str = Field(..., examples=["Active"])
    estimatedCost: str = Field("", examples=["₹120 Cr"])
    spentBudget: Optional[str] = Field(None, examples=["₹54 Cr"])
    progress: Optional[float] = Field(None, ge=0, le=100, examples=[45])


class PortfolioResponse(BaseModel):
    allocated: int
    spent: int
    percentSpent: int
    avgProgress: int


@router.post("/validate-proposal", response_model=ProposalResponse)
def validate(req: ProposalRequest):
    return validate_proposal(req.costCr, req.impactScore).to_dict()


@router.post("/proposals/metrics", response_model=PortfolioResponse)
def metrics(plans: List[PlanRecord]):
    return portfolio_metrics(plan.model_dump() for plan in plans)
