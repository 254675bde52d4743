"""Tests for coefficient admin endpoints."""

from fastapi.testclient import TestClient

from nosugar.api.app import create_app

HEADERS = {"X-Admin-Token": "admin-token"}


def test_get_coefficients(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/coefficients", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["coefficients"]["base_male"] == 36
    assert data["base_limit"] == 30


def test_update_coefficients_changes_next_budget(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/coefficients", json={"base_other": 40}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json()["base_limit"] == 40
    assert client.get("/budget").json()["base_limit"]["total"] == 40


def test_update_coefficients_rejects_inverted_clamp(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/coefficients", json={"clamp_min": 50}, headers=HEADERS
    )

    assert response.status_code == 422
    assert container.coefficient_service.get().clamp_min == 18


def test_update_coefficients_rejects_unknown_key(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/coefficients", json={"sugar_tax": 2}, headers=HEADERS
    )

    assert response.status_code == 422
    assert "sugar_tax" in response.json()["detail"]
