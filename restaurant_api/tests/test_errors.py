from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from restaurant_api.app import app
from restaurant_api.config import AppConfig

client = TestClient(app)

RESTAURANT = {
    "id": 1,
    "name": "Pizza Palace",
    "description": "Pizza",
    "category": "Italian",
    "averageRating": 4.5,
    "priceRange": 2,
}


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point the app at an empty temporary data directory."""
    monkeypatch.setattr(app.state, "config", AppConfig(data_dir=tmp_path))
    return tmp_path


def _write(path: Path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_unknown_route_returns_404_envelope():
    resp = client.get("/api/menus")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "API endpoint not found"}


def test_unsupported_method_is_treated_as_unknown_route():
    resp = client.post("/api/stats")
    assert resp.status_code == 404
    assert resp.json()["message"] == "API endpoint not found"


def test_missing_restaurants_file_returns_500(data_dir: Path):
    resp = client.get("/api/restaurants")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Failed to fetch restaurant data"}


def test_read_error_does_not_leak_details(data_dir: Path):
    (data_dir / "restaurants.json").write_text("{broken", encoding="utf-8")
    resp = client.get("/api/restaurants/1")
    assert resp.status_code == 500
    assert "broken" not in resp.text
    assert str(data_dir) not in resp.text


def test_missing_reviews_file_fails_detail_lookup(data_dir: Path):
    _write(data_dir / "restaurants.json", [RESTAURANT])
    resp = client.get("/api/restaurants/1")
    assert resp.status_code == 500


def test_detail_lookup_on_temporary_data(data_dir: Path):
    _write(data_dir / "restaurants.json", [RESTAURANT])
    _write(data_dir / "reviews.json", [])
    resp = client.get("/api/restaurants/1")
    assert resp.status_code == 200
    assert resp.json()["data"]["reviews"] == []


def test_stats_with_malformed_file_returns_500(data_dir: Path):
    _write(data_dir / "restaurants.json", {"not": "a list"})
    _write(data_dir / "reviews.json", [])
    resp = client.get("/api/stats")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Data files are malformed"}


def test_stats_with_missing_file_returns_500(data_dir: Path):
    _write(data_dir / "restaurants.json", [])
    resp = client.get("/api/stats")
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to fetch statistics"


def test_stats_on_empty_data(data_dir: Path):
    _write(data_dir / "restaurants.json", [])
    _write(data_dir / "reviews.json", [])
    data = client.get("/api/stats").json()["data"]
    assert data["totalRestaurants"] == 0
    assert data["averageRating"] == 0
    assert data["topRatedRestaurants"] == []


@patch("restaurant_api.app.compute_stats", side_effect=RuntimeError("boom"))
def test_unhandled_error_hides_detail_in_production(mock_stats, monkeypatch):
    monkeypatch.setattr(app.state, "config", AppConfig(environment="production"))
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/api/stats")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}


@patch("restaurant_api.app.compute_stats", side_effect=RuntimeError("boom"))
def test_unhandled_error_shows_detail_in_development(mock_stats, monkeypatch):
    monkeypatch.setattr(app.state, "config", AppConfig(environment="development"))
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/api/stats")
    assert resp.status_code == 500
    assert resp.json()["error"] == "boom"


def test_cors_origins_come_from_the_app_config():
    resp = client.get("/health", headers={"Origin": "http://example.com"})
    origins = app.state.config.cors_origins
    if "*" in origins:
        assert resp.headers["access-control-allow-origin"] == "*"
    else:
        assert "access-control-allow-origin" not in resp.headers


def test_failure_body_omits_empty_error_field():
    resp = client.get("/api/restaurants/9999")
    assert set(resp.json()) == {"success", "message"}
