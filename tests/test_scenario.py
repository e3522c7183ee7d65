import pytest

from hydroguard.domain.cities import get_city
from hydroguard.domain.scenario import PRESETS, ScenarioInput, classify_risk, get_preset
from hydroguard.errors import InvalidInput


def test_drought_requires_zero_rain_and_dry_soil():
    assert ScenarioInput(0, 10, 19).is_drought
    assert not ScenarioInput(0, 10, 20).is_drought
    assert not ScenarioInput(0.5, 10, 5).is_drought


def test_active_scenarios():
    assert ScenarioInput(25, 4, 50).is_active
    assert ScenarioInput(0, 100, 5).is_active
    assert not ScenarioInput(0, 100, 50).is_active


def test_total_accumulation():
    assert ScenarioInput(25, 4, 50).total_accumulation_mm == 100


@pytest.mark.parametrize("kwargs", [
    dict(rainfall_intensity_mm_hr=-1, duration_hours=1, soil_saturation_percent=10),
    dict(rainfall_intensity_mm_hr=1, duration_hours=0, soil_saturation_percent=10),
    dict(rainfall_intensity_mm_hr=1, duration_hours=1, soil_saturation_percent=120),
    dict(rainfall_intensity_mm_hr=1, duration_hours=1, soil_saturation_percent=10,
         tide_level_meters=-0.5),
])
def test_invalid_scenarios_rejected(kwargs):
    with pytest.raises(InvalidInput):
        ScenarioInput(**kwargs)


@pytest.mark.parametrize("preset_id, label", [
    ("monsoon_peak", "Severe Flooding"),
    ("tropical_storm", "Localized Inundation"),
    ("standard_rain", "Manageable"),
    ("dry_spell", "Water Stress"),
    ("drought", "Severe Drought"),
])
def test_risk_labels_for_chennai_presets(preset_id, label):
    assert classify_risk(get_preset(preset_id), get_city("chennai")).label == label


def test_no_weather_is_normal():
    assert classify_risk(ScenarioInput(0, 12, 40), get_city("chennai")).label == "Normal / Stable"


def test_thresholds_depend_on_city():
    storm = get_preset("tropical_storm")  # 65 mm/hr
    assert classify_risk(storm, get_city("mumbai")).label == "Severe Flooding"
    assert classify_risk(storm, get_city("india")).label == "Localized Inundation"


def test_presets():
    assert set(PRESETS) == {"monsoon_peak", "tropical_storm", "standard_rain", "dry_spell", "drought"}
    assert get_preset("drought").is_drought
    assert not get_preset("dry_spell").is_drought
    with pytest.raises(InvalidInput):
        get_preset("tsunami")
