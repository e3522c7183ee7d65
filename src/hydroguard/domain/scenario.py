"""What-if scenario inputs, drought detection and headline risk labels."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from hydroguard.errors import InvalidInput, require_finite, require_non_negative

__all__ = [
    "DROUGHT_SATURATION_LIMIT",
    "ScenarioInput",
    "RiskLevel",
    "classify_risk",
    "PRESETS",
    "get_preset",
]

# Drought mode needs zero rain and soil saturation strictly below this.
DROUGHT_SATURATION_LIMIT = 20
SEVERE_DROUGHT_SATURATION = 10
WATER_STRESS_SATURATION = 25


@dataclass(frozen=True)
class ScenarioInput:
    rainfall_intensity_mm_hr: float
    duration_hours: float
    soil_saturation_percent: float
    tide_level_meters: float = 0.0

    def __post_init__(self):
        require_non_negative("rainfall_intensity_mm_hr", self.rainfall_intensity_mm_hr)
        if require_finite("duration_hours", self.duration_hours) <= 0:
            raise InvalidInput(f"duration_hours must be > 0, got {self.duration_hours}")
        saturation = require_finite("soil_saturation_percent", self.soil_saturation_percent)
        if not 0 <= saturation <= 100:
            raise InvalidInput(
                f"soil_saturation_percent must be within [0, 100], got {saturation}")
        require_non_negative("tide_level_meters", self.tide_level_meters)

    @property
    def is_drought(self) -> bool:
        return (self.rainfall_intensity_mm_hr == 0
                and self.soil_saturation_percent < DROUGHT_SATURATION_LIMIT)

    @property
    def is_active(self) -> bool:
        """True when the scenario changes anything (rain, or drought)."""
        return self.rainfall_intensity_mm_hr > 0 or self.is_drought

    @property
    def total_accumulation_mm(self) -> float:
        return self.rainfall_intensity_mm_hr * self.duration_hours

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RiskLevel:
    label: str
    description: str


def classify_risk(scenario: ScenarioInput, profile) -> RiskLevel:
    """Headline risk for a scenario against a city's rainfall thresholds.

    `profile` needs `rainfall_threshold_mm_hr` (design capacity) and
    `operational_limit_mm_hr` (where street flooding starts).
    """
    intensity = scenario.rainfall_intensity_mm_hr
    saturation = scenario.soil_saturation_percent

    if intensity > profile.rainfall_threshold_mm_hr:
        return RiskLevel("Severe Flooding", "Critical infrastructure failure likely")
    if intensity > profile.operational_limit_mm_hr:
        return RiskLevel("Localized Inundation", "Drainage capacity exceeded")

    if intensity == 0 and saturation <= SEVERE_DROUGHT_SATURATION:
        return RiskLevel("Severe Drought", "Acute water scarcity. Aquifers depleted.")
    if intensity == 0 and saturation <= WATER_STRESS_SATURATION:
        return RiskLevel("Water Stress", "Reservoir evaporation high.")

    if intensity > 0:
        return RiskLevel("Manageable", "Standard operations")
    return RiskLevel("Normal / Stable", "No active weather event")


PRESETS: Dict[str, tuple] = {
    "monsoon_peak": ("Monsoon Peak (Extreme)", ScenarioInput(110, 24, 95, 1.2)),
    "tropical_storm": ("Tropical Storm", ScenarioInput(65, 6, 80, 2.5)),
    "standard_rain": ("Standard Seasonal Rain", ScenarioInput(25, 4, 50, 0.5)),
    "dry_spell": ("Dry Spell / Summer", ScenarioInput(0, 720, 20, 0.2)),
    "drought": ("Severe Drought / Failed Monsoon", ScenarioInput(0, 2160, 5, 0.1)),
}


def get_preset(preset_id: str) -> ScenarioInput:
    try:
        return PRESETS[preset_id][1]
    except KeyError:
        raise InvalidInput(
            f"Unknown scenario preset '{preset_id}'. Choose from: {', '.join(PRESETS)}") from None
