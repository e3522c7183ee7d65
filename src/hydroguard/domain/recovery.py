"""Rescue-task prioritisation for flood-impacted locations."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hydroguard.errors import require_non_negative

__all__ = [
    "LocationType",
    "PriorityTier",
    "RecoveryTaskScore",
    "priority_points",
    "score_priority",
    "assess_task",
]


class LocationType(str, Enum):
    HOSPITAL = "Hospital"
    RESIDENTIAL = "Residential"
    ROAD = "Road"
    OTHER = "Other"

    @classmethod
    def parse(cls, value) -> "LocationType":
        """Case-insensitive lookup; anything unrecognised is `OTHER`."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.OTHER


class PriorityTier(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def badge(self) -> str:
        return _BADGES[self]


_BADGES = {
    PriorityTier.CRITICAL: "red",
    PriorityTier.HIGH: "orange",
    PriorityTier.MEDIUM: "blue",
    PriorityTier.LOW: "default",
}

_LOCATION_POINTS = {
    LocationType.HOSPITAL: 40,
    LocationType.RESIDENTIAL: 20,
}

# (minimum score, tier), checked top-down
_TIERS = (
    (80, PriorityTier.CRITICAL),
    (50, PriorityTier.HIGH),
    (30, PriorityTier.MEDIUM),
)


def priority_points(depth_ft: float, location_type, population_affected: float) -> int:
    """Additive urgency score: depth + location type + population."""
    depth = require_non_negative("depth_ft", depth_ft)
    population = require_non_negative("population_affected", population_affected)

    if depth > 5:
        score = 50
    elif depth > 2:
        score = 30
    else:
        score = 10

    score += _LOCATION_POINTS.get(LocationType.parse(location_type), 10)

    if population > 1000:
        score += 20
    elif population > 100:
        score += 10
    return score


def tier_for_score(score: int) -> PriorityTier:
    for minimum, tier in _TIERS:
        if score >= minimum:
            return tier
    return PriorityTier.LOW


def score_priority(depth_ft: float, location_type, population_affected: float) -> PriorityTier:
    return tier_for_score(priority_points(depth_ft, location_type, population_affected))


@dataclass(frozen=True)
class RecoveryTaskScore:
    """Priority snapshot taken when a task is reported.

    Not re-derived if conditions at the location change later.
    """
    depth_ft: float
    location_type: LocationType
    population_affected: float
    score: int
    tier: PriorityTier

    def to_dict(self) -> dict:
        return {"tier": self.tier.value, "score": self.score}


def assess_task(depth_ft: float, location_type, population_affected: float) -> RecoveryTaskScore:
    score = priority_points(depth_ft, location_type, population_affected)
    return RecoveryTaskScore(
        depth_ft=float(depth_ft),
        location_type=LocationType.parse(location_type),
        population_affected=float(population_affected),
        score=score,
        tier=tier_for_score(score),
    )
