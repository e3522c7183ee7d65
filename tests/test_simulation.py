from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pytest

from hydroguard.domain.cities import CITIES, BASE_RESERVOIRS, CityProfile, LocationLevel, build_profile, get_city
from hydroguard.domain.hydrology import Reservoir, RiverStatus
from hydroguard.domain.scenario import ScenarioInput, get_preset
from hydroguard.domain.simulation import SimulationMode, simulate_city, simulate_pair
from hydroguard.errors import InvalidConfiguration


def _alert_ids(snapshot):
    return {a.id for a in snapshot.alerts}


def test_simulate_pair_reference_scenario():
    out = simulate_pair(15, 4, 426, 60, 3645, 2850, 60000, 15000)
    assert out["runoff"] == 1917
    assert out["overflow"] is False
    assert out["newFlow"] < 60000
    assert out["riverStatus"] == "Normal"
    assert set(out) == {"runoff", "newLevel", "newFlow", "overflow", "pctFull", "riverStatus"}


def test_simulate_pair_drought_uses_multipliers():
    out = simulate_pair(0, 720, 426, 60, 3645, 2850, 60000, 15000,
                        soil_saturation_percent=5)
    assert out["runoff"] == 0
    assert out["overflow"] is False
    assert out["newLevel"] == pytest.approx(1710.0)
    assert out["newFlow"] == pytest.approx(3000.0)
    assert out["pctFull"] == pytest.approx(1710.0 / 3645 * 100)
    assert out["riverStatus"] == "Normal"


@pytest.mark.parametrize("saturation, expected_level", [(19.9, 1710.0), (20, 2850.0)])
def test_simulate_pair_drought_boundary(saturation, expected_level):
    out = simulate_pair(0, 720, 426, 60, 3645, 2850, 60000, 15000,
                        soil_saturation_percent=saturation)
    assert out["newLevel"] == pytest.approx(expected_level)


def test_simulate_pair_rain_ignores_dry_soil():
    out = simulate_pair(15, 4, 426, 60, 3645, 2850, 60000, 15000,
                        soil_saturation_percent=5)
    assert out["runoff"] == 1917
    assert out["newLevel"] > 2850


def test_simulate_pair_zero_capacity():
    with pytest.raises(InvalidConfiguration):
        simulate_pair(15, 4, 426, 60, 0, 0, 60000, 15000)


def test_drought_path_uses_multipliers_not_time_step():
    snap = simulate_city(get_city("chennai"), get_preset("drought"))
    assert snap.mode is SimulationMode.DROUGHT
    assert snap.runoff_cusecs == 0
    primary = snap.reservoirs[0]
    assert primary.name == "Chembarambakkam"
    assert primary.current_level_mcft == pytest.approx(2850 * 0.6)
    assert primary.outflow_cusecs == pytest.approx(500 * 1.5)
    assert primary.inflow_cusecs == pytest.approx(1200 * 0.1)
    assert snap.rivers[0].current_flow_cusecs == pytest.approx(15000 * 0.2)
    assert snap.overflowed == ()
    assert {"sim-drought-1", "sim-drought-2"} <= _alert_ids(snap)
    assert snap.risk.label == "Severe Drought"


def test_dry_soil_with_rain_is_not_drought():
    snap = simulate_city(get_city("chennai"), ScenarioInput(1, 1, 5))
    assert snap.mode is SimulationMode.FLOOD


def test_idle_scenario_leaves_base_tables():
    profile = get_city("chennai")
    snap = simulate_city(profile, get_preset("dry_spell"))
    assert snap.mode is SimulationMode.IDLE
    assert snap.reservoirs == profile.reservoirs
    assert snap.rivers == profile.rivers
    assert snap.alerts == ()


def test_standard_rain_flood_path():
    snap = simulate_city(get_city("chennai"), get_preset("standard_rain"))
    assert snap.mode is SimulationMode.FLOOD
    assert snap.runoff_cusecs == 3408  # floor(25 * 426 * 0.64 * 0.5)
    assert snap.overflowed == ()
    volume = 3408 * 3600 * 4 / 1_000_000
    assert snap.reservoirs[0].current_level_mcft == pytest.approx(2850 + volume)
    # riv-2 receives res-2 and res-5: 18000 + 2 * 0.2 * 3408
    assert snap.rivers[1].current_flow_cusecs == pytest.approx(18000 + 2 * 0.2 * 3408)
    assert snap.rivers[1].status is RiverStatus.WARNING
    assert snap.alerts == ()
    assert snap.risk.label == "Manageable"


def test_monsoon_peak_overflows_and_alerts():
    snap = simulate_city(get_city("chennai"), get_preset("monsoon_peak"))
    assert snap.mode is SimulationMode.FLOOD
    assert set(snap.overflowed) == {r.id for r in BASE_RESERVOIRS}
    assert all(r.current_level_mcft == r.capacity_mcft for r in snap.reservoirs)
    runoff = snap.runoff_cusecs
    assert snap.rivers[0].current_flow_cusecs == pytest.approx(15000 + 2 * runoff * 1.7)
    assert snap.rivers[0].status is RiverStatus.CRITICAL
    assert snap.rivers[2].status is RiverStatus.NORMAL
    ids = _alert_ids(snap)
    assert "sim-flood" in ids
    assert "sim-surplus-res-1" in ids
    assert {"sim-river-riv-1", "sim-river-riv-2"} <= ids
    assert "sim-river-riv-3" not in ids
    assert snap.to_dict()["alerts_triggered"] is True


def test_profile_is_not_mutated():
    profile = get_city("chennai")
    before = profile.reservoirs
    simulate_city(profile, get_preset("monsoon_peak"))
    simulate_city(profile, get_preset("drought"))
    assert profile.reservoirs == before
    assert CITIES["chennai"].reservoirs[0].current_level_mcft == 2850


def test_concurrent_runs_match_sequential():
    jobs = [(city_id, preset) for city_id in CITIES for preset in ("monsoon_peak", "drought", "standard_rain")]
    sequential = [simulate_city(get_city(c), get_preset(p)) for c, p in jobs]
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(lambda job: simulate_city(get_city(job[0]), get_preset(job[1])), jobs))
    assert parallel == sequential


def test_custom_profile():
    profile = build_profile(
        id="test", name="Test Town", level=LocationLevel.DISTRICT,
        rainfall_threshold_mm_hr=30, operational_limit_mm_hr=10,
        impervious_surface_percentage=50, catchment_area_sq_km=10,
        reservoir_names=("Tank A",),
    )
    assert profile.reservoirs[0].name == "Tank A"
    assert profile.reservoirs[1].name == "Secondary Reservoir"
    snap = simulate_city(profile, ScenarioInput(20, 2, 60))
    assert snap.runoff_cusecs == 50  # floor(20 * 10 * 0.5 * 0.5)
    assert snap.risk.label == "Localized Inundation"


def test_profile_rejects_reservoir_without_river():
    orphan = replace(BASE_RESERVOIRS[0], river_id="riv-404")
    with pytest.raises(InvalidConfiguration):
        CityProfile(
            id="bad", name="Bad", level=LocationLevel.CITY,
            rainfall_threshold_mm_hr=50, operational_limit_mm_hr=20,
            impervious_surface_percentage=50, catchment_area_sq_km=10,
            reservoirs=(orphan,),
        )


def test_unknown_city():
    with pytest.raises(InvalidConfiguration):
        get_city("atlantis")


def test_reservoir_type_in_snapshot():
    snap = simulate_city(get_city("nyc"), get_preset("tropical_storm"))
    assert all(isinstance(r, Reservoir) for r in snap.reservoirs)
    payload = snap.to_dict()
    assert payload["reservoirs"][0]["name"] == "Central Park Res"
    assert payload["rivers"][0]["status"] in {"Normal", "Warning", "Critical"}
