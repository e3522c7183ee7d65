"""Cost-efficiency classification for infrastructure proposals.

An invalid proposal (non-positive cost, impact outside (0, 10]) is a normal
business outcome and comes back as `EfficiencyTier.INVALID`; only NaN or
non-numeric input raises.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional

from hydroguard.errors import require_finite

__all__ = [
    "EfficiencyTier",
    "ProposalScore",
    "validate_proposal",
    "parse_crore",
    "portfolio_metrics",
]

HIGH_VALUE_MAX_RATIO = 5.0
LOW_EFFICIENCY_MIN_RATIO = 20.0
MAX_IMPACT_SCORE = 10.0


class EfficiencyTier(str, Enum):
    INVALID = "Invalid"
    LOW_EFFICIENCY = "Low Efficiency"
    MODERATE = "Moderate"
    HIGH_VALUE = "High Value"


@dataclass(frozen=True)
class ProposalScore:
    is_valid: bool
    tier: EfficiencyTier
    ratio: Optional[float]

    def to_dict(self) -> dict:
        return {"isValid": self.is_valid, "tier": self.tier.value, "ratio": self.ratio}


def validate_proposal(cost_cr: float, impact_score: float) -> ProposalScore:
    """Classify a proposal by cost (crore) per impact point.

    ratio <= 5 is High Value, ratio > 20 is Low Efficiency, anything between
    is Moderate. Both boundaries matter: 45 Cr at impact 9 is High Value.
    """
    cost = require_finite("cost_cr", cost_cr)
    impact = require_finite("impact_score", impact_score)
    if cost <= 0 or impact <= 0 or impact > MAX_IMPACT_SCORE:
        return ProposalScore(is_valid=False, tier=EfficiencyTier.INVALID, ratio=None)

    ratio = cost / impact
    if ratio <= HIGH_VALUE_MAX_RATIO:
        tier = EfficiencyTier.HIGH_VALUE
    elif ratio > LOW_EFFICIENCY_MIN_RATIO:
        tier = EfficiencyTier.LOW_EFFICIENCY
    else:
        tier = EfficiencyTier.MODERATE
    return ProposalScore(is_valid=True, tier=tier, ratio=ratio)


_DIGITS = re.compile(r"[^0-9]")


def parse_crore(text: Optional[str]) -> int:
    """Parse display amounts such as "₹120 Cr" into whole crore (0 if none)."""
    if not text:
        return 0
    digits = _DIGITS.sub("", str(text))
    return int(digits) if digits else 0


def portfolio_metrics(plans: Iterable[Mapping]) -> dict:
    """Budget summary over a list of plan records.

    Budget totals cover plans whose status is Active or Approved; average
    progress covers Active plans only.
    """
    allocated = 0
    spent = 0
    active_progress = []
    for plan in plans:
        status = plan.get("status")
        if status in ("Active", "Approved"):
            allocated += parse_crore(plan.get("estimatedCost"))
            spent += parse_crore(plan.get("spentBudget"))
        if status == "Active":
            active_progress.append(plan.get("progress") or 0)

    avg_progress = round(sum(active_progress) / len(active_progress)) if active_progress else 0
    return {
        "allocated": allocated,
        "spent": spent,
        "percentSpent": round(spent / allocated * 100) if allocated > 0 else 0,
        "avgProgress": avg_progress,
    }
