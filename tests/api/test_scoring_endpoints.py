import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture(scope="module")
def client():
    with TestClient(create_app()) as c:
        yield c


def test_prioritize_critical(client: TestClient):
    resp = client.post("/api/v1/prioritize", json={
        "depthFt": 6, "locationType": "Hospital", "populationAffected": 5000})
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"tier": "Critical", "score": 110, "badge": "red"}


def test_prioritize_defaults(client: TestClient):
    resp = client.post("/api/v1/prioritize", json={"depthFt": 1})
    assert resp.status_code == 200
    assert resp.json()["tier"] == "Low"


def test_prioritize_negative_depth(client: TestClient):
    resp = client.post("/api/v1/prioritize", json={
        "depthFt": -2, "locationType": "Road", "populationAffected": 10})
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_input"


def test_validate_proposal_boundary(client: TestClient):
    resp = client.post("/api/v1/validate-proposal", json={"costCr": 45, "impactScore": 9})
    assert resp.status_code == 200
    body = resp.json()
    assert body["isValid"] is True
    assert body["tier"] == "High Value"
    assert body["ratio"] == pytest.approx(5.0)


def test_invalid_proposal_is_not_an_http_error(client: TestClient):
    resp = client.post("/api/v1/validate-proposal", json={"costCr": 30, "impactScore": 11})
    assert resp.status_code == 200
    assert resp.json() == {"isValid": False, "tier": "Invalid", "ratio": None}


def test_portfolio_metrics(client: TestClient):
    resp = client.post("/api/v1/proposals/metrics", json=[
        {"status": "Active", "estimatedCost": "₹120 Cr", "spentBudget": "₹54 Cr", "progress": 45},
        {"status": "Proposed", "estimatedCost": "₹80 Cr"},
    ])
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"allocated": 120, "spent": 54, "percentSpent": 45, "avgProgress": 45}
