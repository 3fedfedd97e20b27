"""Tests for vehicle endpoints."""

import pytest
from httpx import AsyncClient

from smartpark.db.models import ParkingSlot, Vehicle

from tests.conftest import OPERATOR_HEADERS


@pytest.mark.asyncio
async def test_create_vehicle(async_client: AsyncClient):
    """Test registering a vehicle."""
    response = await async_client.post(
        "/api/v1/vehicles/",
        json={
            "plate_number": "RAC555B",
            "driver_name": "Alice Mukamana",
            "phone_number": "0788123456",
            "car_model": "Corolla",
        },
        headers=OPERATOR_HEADERS,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["plate_number"] == "RAC555B"
    assert data["car_color"] is None


@pytest.mark.asyncio
async def test_create_vehicle_missing_driver(async_client: AsyncClient):
    response = await async_client.post(
        "/api/v1/vehicles/",
        json={"plate_number": "RAC555B", "phone_number": "0788123456"},
        headers=OPERATOR_HEADERS,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_duplicate_vehicle(async_client: AsyncClient, car_rab123a: Vehicle):
    response = await async_client.post(
        "/api/v1/vehicles/",
        json={"plate_number": "RAB123A", "driver_name": "X", "phone_number": "1"},
        headers=OPERATOR_HEADERS,
    )
    assert response.status_code == 409
    assert response.json()["code"] == "duplicate_vehicle"


@pytest.mark.asyncio
async def test_list_and_search_vehicles(async_client: AsyncClient, car_rab123a: Vehicle):
    response = await async_client.get("/api/v1/vehicles/")
    assert response.status_code == 200
    assert len(response.json()) == 1

    response = await async_client.get("/api/v1/vehicles/search", params={"driver_name": "Jean"})
    assert [v["plate_number"] for v in response.json()] == ["RAB123A"]

    response = await async_client.get("/api/v1/vehicles/search", params={"plate_number": "XYZ"})
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_update_delete_vehicle(async_client: AsyncClient, car_rab123a: Vehicle):
    response = await async_client.get("/api/v1/vehicles/RAB123A")
    assert response.status_code == 200
    assert response.json()["driver_name"] == "Jean Uwimana"

    response = await async_client.patch(
        "/api/v1/vehicles/RAB123A", json={"car_color": "Silver"}, headers=OPERATOR_HEADERS
    )
    assert response.status_code == 200
    assert response.json()["car_color"] == "Silver"
    assert response.json()["car_model"] == "Toyota RAV4"

    response = await async_client.delete("/api/v1/vehicles/RAB123A", headers=OPERATOR_HEADERS)
    assert response.status_code == 204

    response = await async_client.get("/api/v1/vehicles/RAB123A")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_parked_vehicle_status_and_history(
    async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle
):
    response = await async_client.get("/api/v1/vehicles/RAB123A/status")
    assert response.json()["is_parked"] is False
    assert response.json()["current_parking"] is None

    response = await async_client.post(
        "/api/v1/parking/entry",
        json={"plate_number": "RAB123A", "slot_number": "A1"},
        headers=OPERATOR_HEADERS,
    )
    record_id = response.json()["record_id"]

    response = await async_client.get("/api/v1/vehicles/RAB123A/status")
    data = response.json()
    assert data["is_parked"] is True
    assert data["current_parking"]["record_id"] == record_id
    assert data["current_parking"]["slot_number"] == "A1"

    response = await async_client.delete("/api/v1/vehicles/RAB123A", headers=OPERATOR_HEADERS)
    assert response.status_code == 409
    assert response.json()["code"] == "vehicle_has_active_session"

    response = await async_client.get("/api/v1/vehicles/RAB123A/history")
    assert response.status_code == 200
    history = response.json()
    assert history["car"]["plate_number"] == "RAB123A"
    assert [h["record"]["record_id"] for h in history["history"]] == [record_id]
    assert history["history"][0]["payment_count"] == 0
