#tests/test_app.py
from fastapi.testclient import TestClient

from app import app

client = TestClient(app)

DEBTS = [
    {"id": "A", "debt_type": "credit_card", "balance": 500, "annual_rate": 24, "minimum_payment": 25},
    {"id": "B", "debt_type": "personal_loan", "balance": 2000, "annual_rate": 6, "minimum_payment": 50},
]


def test_health_and_strategies():
    assert client.get("/api/health").json()["status"] == "healthy"
    data = client.get("/api/strategies").json()
    assert [s["id"] for s in data["payment"]] == ["avalanche", "snowball", "combined"]
    assert [s["id"] for s in data["collection"]] == ["aggressive", "conservative"]


def test_projections():
    resp = client.post("/api/projections", json={
        "debts": DEBTS, "monthly_budget": 150, "start_date": "2026-01-01",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["projections"]) == 3
    first = data["projections"][0]
    assert first["strategy"] == "avalanche"
    assert first["converged"] is True
    assert first["balance_series"][0] == 2500
    assert first["monthly_breakdown"]
    assert data["best_plan"] in {"avalanche", "snowball", "combined"}


def test_projections_without_breakdown():
    resp = client.post("/api/projections", json={
        "debts": DEBTS, "strategies": ["snowball"], "include_breakdown": False,
    })
    proj = resp.json()["projections"]
    assert len(proj) == 1 and "monthly_breakdown" not in proj[0]


def test_insufficient_budget_is_not_an_error():
    resp = client.post("/api/projections", json={"debts": DEBTS, "monthly_budget": 50})
    assert resp.status_code == 200
    data = resp.json()
    assert all(p["status"] == "insufficient_payment" for p in data["projections"])
    assert data["best_plan"] is None


def test_invalid_debt_is_400():
    bad = [{"id": "x", "balance": -5, "annual_rate": 3, "minimum_payment": 10}]
    resp = client.post("/api/projections", json={"debts": bad})
    assert resp.status_code == 400
    assert "Invalid debt" in resp.json()["detail"]


def test_empty_debts():
    data = client.post("/api/projections", json={"debts": []}).json()
    assert data["empty"] is True and data["projections"] == []


def test_whatif():
    data = client.post("/api/projections/whatif", json={
        "debts": DEBTS, "extra_payment": 100, "strategy": "snowball",
    }).json()
    assert data["savings"]["months_saved"] > 0
    assert data["comparable"] is True
    assert data["savings"]["interest_saved"] > 0


def test_whatif_with_underfunded_baseline():
    data = client.post("/api/projections/whatif", json={
        "debts": DEBTS, "extra_payment": 100, "monthly_budget": 50,
    }).json()
    assert data["comparable"] is False
    assert data["baseline"]["status"] == "insufficient_payment"
    assert data["savings"]["months_saved"] is None
    assert data["formatted"] is None


def test_collections_and_summary():
    data = client.post("/api/collections", json={"debts": DEBTS, "probability": 1.0}).json()
    assert [p["collection_strategy"] for p in data["projections"]] == ["aggressive", "conservative"]
    summary = client.post("/api/debts/summary", json={"debts": DEBTS}).json()["summary"]
    assert summary["total_current"] == 2500
