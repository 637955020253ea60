"""
API tests for the Bid Ranking Service
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def bids_payload():
    """Bid store rows (camelCase, as kept per tender)"""
    return [
        {"id": "b100", "supplierId": "s1", "price": 100, "deliveryDays": 5, "warrantyMonths": 12, "qualityScore": 4},
        {"id": "b90", "supplierId": "s2", "price": 90, "deliveryDays": 10, "warrantyMonths": 6, "qualityScore": 3},
    ]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.json()["service"] == "bid-ranking"


def test_analyze_with_default_preferences(client, bids_payload):
    resp = client.post("/ranking/analyze", json={"bids": bids_payload})
    assert resp.status_code == 200

    data = resp.json()
    assert [r["id"] for r in data["results"]] == ["b100", "b90"]
    assert [r["rank"] for r in data["results"]] == [1, 2]
    assert data["results"][0]["score"] == pytest.approx(9 / 13)
    assert data["results"][0]["supplierId"] == "s1"
    assert data["leaderId"] == "b100"
    assert data["comparisonAvailable"] is True
    assert data["preferencesUsed"]["pricePriority"] == 4


def test_analyze_with_price_only_preferences(client, bids_payload):
    payload = {
        "bids": bids_payload,
        "preferences": {"pricePriority": 5, "deliveryPriority": 0, "warrantyPriority": 0, "qualityPriority": 0},
    }
    resp = client.post("/ranking/analyze", json=payload)
    assert resp.status_code == 200
    assert resp.json()["leaderId"] == "b90"


def test_analyze_empty(client):
    resp = client.post("/ranking/analyze", json={"bids": []})
    assert resp.status_code == 200
    assert resp.json()["results"] == []
    assert resp.json()["leaderId"] is None


def test_analyze_rejects_non_positive_price(client):
    resp = client.post("/ranking/analyze", json={"bids": [{"id": "x", "supplierId": "s", "price": 0}]})
    assert resp.status_code == 422


def test_competitive_view(client, bids_payload):
    payload = {
        "bids": bids_payload,
        "supplierId": "s2",
        "preferences": '{"pricePriority": 4, "deliveryPriority": 3, "warrantyPriority": 3, "qualityPriority": 3}',
    }
    resp = client.post("/ranking/competitive", json=payload)
    assert resp.status_code == 200

    data = resp.json()
    assert [entry["rank"] for entry in data] == [1, 2]
    assert [entry["isYours"] for entry in data] == [False, True]
    assert "supplierId" not in data[0]
    assert "id" not in data[0]


def test_competitive_view_bad_stored_preferences(client, bids_payload):
    payload = {"bids": bids_payload, "supplierId": "s1", "preferences": "not-json"}
    resp = client.post("/ranking/competitive", json=payload)
    assert resp.status_code == 200
    assert resp.json()[0]["isYours"] is True


def test_default_preferences(client):
    resp = client.get("/ranking/preferences/default")
    assert resp.status_code == 200
    assert resp.json() == {
        "pricePriority": 4,
        "deliveryPriority": 3,
        "warrantyPriority": 3,
        "qualityPriority": 3,
    }
