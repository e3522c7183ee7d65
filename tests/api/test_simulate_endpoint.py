import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture(scope="module")
def client():
    with TestClient(create_app()) as c:
        yield c


def _payload(**overrides):
    payload = {
        "rainfallIntensityMmHr": 15,
        "durationHours": 4,
        "soilSaturationPercent": 50,
        "areaSqKm": 426,
        "efficiencyPercent": 60,
        "reservoir": {"capacity": 3645, "currentLevel": 2850},
        "river": {"designCapacity": 60000, "currentFlow": 15000},
    }
    payload.update(overrides)
    return payload


def test_simulate_happy_path(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload())
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["runoff"] == 1917
    assert body["overflow"] is False
    assert body["newFlow"] < 60000
    assert body["riverStatus"] == "Normal"
    assert body["newLevel"] == pytest.approx(2850 + 1917 * 3600 * 4 / 1_000_000)


def test_simulate_overflow_reports_critical_river(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(
        rainfallIntensityMmHr=180, durationHours=12, efficiencyPercent=95,
        reservoir={"capacity": 3645, "currentLevel": 3462.75},
        river={"designCapacity": 60000, "currentFlow": 40000},
    ))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["overflow"] is True
    assert body["pctFull"] == pytest.approx(100.0)
    assert body["riverStatus"] == "Critical"


def test_simulate_zero_capacity_is_configuration_error(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(
        reservoir={"capacity": 0, "currentLevel": 0}))
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_configuration"


def test_simulate_level_above_capacity_is_input_error(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(
        reservoir={"capacity": 100, "currentLevel": 150}))
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_input"


def test_simulate_negative_rainfall_rejected_by_schema(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(rainfallIntensityMmHr=-5))
    assert resp.status_code == 422


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_simulate_overflowing_product_is_input_error(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(
        rainfallIntensityMmHr=1e200, areaSqKm=1e200))
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_input"


def test_simulate_drought_scales_level_and_flow(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(
        rainfallIntensityMmHr=0, durationHours=720, soilSaturationPercent=19))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["runoff"] == 0
    assert body["overflow"] is False
    assert body["newLevel"] == pytest.approx(2850 * 0.6)
    assert body["newFlow"] == pytest.approx(15000 * 0.2)
    assert body["pctFull"] == pytest.approx(2850 * 0.6 / 3645 * 100)


def test_simulate_dry_but_saturated_soil_is_not_drought(client: TestClient):
    resp = client.post("/api/v1/simulate", json=_payload(
        rainfallIntensityMmHr=0, durationHours=720, soilSaturationPercent=20))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["newLevel"] == pytest.approx(2850)
    assert body["newFlow"] == pytest.approx(15000)
