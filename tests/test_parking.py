"""Tests for parking entry/exit endpoints and parking reports."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from smartpark.api.deps import get_clock
from smartpark.db.models import ParkingSlot, Vehicle
from smartpark.main import app

from tests.conftest import OPERATOR_HEADERS, utc


async def _enter(async_client: AsyncClient, **payload):
    return await async_client.post("/api/v1/parking/entry", json=payload, headers=OPERATOR_HEADERS)


@pytest.mark.asyncio
async def test_entry_and_exit(async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    response = await _enter(
        async_client, plate_number="RAB123A", slot_number="A1", entry_time="2025-03-01T10:00:00Z"
    )
    assert response.status_code == 201
    record = response.json()
    assert record["status"] == "active"
    assert record["created_by"] == "operator-1"
    assert record["total_amount"] is None

    response = await async_client.get("/api/v1/slots/A1")
    assert response.json()["slot_status"] == "occupied"

    response = await async_client.post(
        f"/api/v1/parking/{record['record_id']}/exit",
        json={"exit_time": "2025-03-01T11:30:00Z"},
        headers=OPERATOR_HEADERS,
    )
    assert response.status_code == 200
    closed = response.json()
    assert closed["status"] == "completed"
    assert closed["duration_minutes"] == 90
    assert Decimal(closed["total_amount"]) == Decimal("2000")

    response = await async_client.get("/api/v1/slots/A1")
    assert response.json()["slot_status"] == "available"


@pytest.mark.asyncio
async def test_exit_without_body_uses_clock(
    async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle
):
    app.dependency_overrides[get_clock] = lambda: (lambda: utc(2025, 3, 1, 10, 20))

    response = await _enter(
        async_client, plate_number="RAB123A", slot_number="A1", entry_time="2025-03-01T10:00:00Z"
    )
    record_id = response.json()["record_id"]

    response = await async_client.post(f"/api/v1/parking/{record_id}/exit", headers=OPERATOR_HEADERS)
    assert response.status_code == 200
    assert response.json()["duration_minutes"] == 20
    assert Decimal(response.json()["total_amount"]) == Decimal("1000")


@pytest.mark.asyncio
async def test_entry_requires_operator(async_client: AsyncClient, slot_a1: ParkingSlot):
    response = await async_client.post(
        "/api/v1/parking/entry", json={"plate_number": "RAB123A", "slot_number": "A1"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_entry_new_vehicle_without_details(async_client: AsyncClient, slot_a1: ParkingSlot):
    response = await _enter(async_client, plate_number="RAZ000Z", slot_number="A1")
    assert response.status_code == 422
    assert response.json()["code"] == "vehicle_details_required"


@pytest.mark.asyncio
async def test_entry_conflicts(async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    response = await _enter(async_client, plate_number="RAB123A", slot_number="A1")
    assert response.status_code == 201

    response = await _enter(
        async_client,
        plate_number="RAD777C",
        slot_number="A1",
        driver_name="Eric",
        phone_number="0788555444",
    )
    assert response.status_code == 409
    assert response.json()["code"] == "slot_unavailable"

    response = await async_client.post(
        "/api/v1/slots/", json={"slot_number": "A2"}, headers=OPERATOR_HEADERS
    )
    response = await _enter(async_client, plate_number="RAB123A", slot_number="A2")
    assert response.status_code == 409
    assert response.json()["code"] == "vehicle_already_parked"

    response = await _enter(async_client, plate_number="RAB123A", slot_number="Q9")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_double_exit(async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    response = await _enter(async_client, plate_number="RAB123A", slot_number="A1")
    record_id = response.json()["record_id"]

    response = await async_client.post(f"/api/v1/parking/{record_id}/exit", headers=OPERATOR_HEADERS)
    assert response.status_code == 200

    response = await async_client.post(f"/api/v1/parking/{record_id}/exit", headers=OPERATOR_HEADERS)
    assert response.status_code == 409
    assert response.json()["code"] == "session_not_active"


@pytest.mark.asyncio
async def test_exit_before_entry(async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    response = await _enter(
        async_client, plate_number="RAB123A", slot_number="A1", entry_time="2025-03-01T10:00:00Z"
    )
    record_id = response.json()["record_id"]

    response = await async_client.post(
        f"/api/v1/parking/{record_id}/exit",
        json={"exit_time": "2025-03-01T09:00:00Z"},
        headers=OPERATOR_HEADERS,
    )
    assert response.status_code == 422
    assert response.json()["code"] == "invalid_exit_time"


@pytest.mark.asyncio
async def test_lists_and_search(async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    response = await _enter(
        async_client, plate_number="RAB123A", slot_number="A1", entry_time="2025-03-01T10:00:00Z"
    )
    record_id = response.json()["record_id"]

    response = await async_client.get("/api/v1/parking/")
    assert [r["record_id"] for r in response.json()] == [record_id]

    response = await async_client.get("/api/v1/parking/active")
    assert [r["record_id"] for r in response.json()] == [record_id]

    response = await async_client.get(f"/api/v1/parking/{record_id}")
    assert response.status_code == 200
    assert response.json()["plate_number"] == "RAB123A"

    response = await async_client.get(
        "/api/v1/parking/search",
        params={"plate_number": "RAB", "date_from": "2025-03-01", "date_to": "2025-03-01"},
    )
    assert [r["record_id"] for r in response.json()] == [record_id]

    response = await async_client.get("/api/v1/parking/search", params={"status": "completed"})
    assert response.json() == []

    response = await async_client.get("/api/v1/parking/999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_parking_reports(async_client: AsyncClient, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    app.dependency_overrides[get_clock] = lambda: (lambda: utc(2025, 3, 1, 18, 0))

    response = await _enter(
        async_client, plate_number="RAB123A", slot_number="A1", entry_time="2025-03-01T10:00:00Z"
    )
    record_id = response.json()["record_id"]
    await async_client.post(
        f"/api/v1/parking/{record_id}/exit",
        json={"exit_time": "2025-03-01T11:30:00Z"},
        headers=OPERATOR_HEADERS,
    )

    response = await async_client.get(
        "/api/v1/parking/statistics", params={"date_from": "2025-03-01", "date_to": "2025-03-31"}
    )
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_records"] == 1
    assert stats["completed_records"] == 1
    assert Decimal(stats["total_revenue"]) == Decimal("2000")
    assert stats["avg_duration_minutes"] == 90

    response = await async_client.get("/api/v1/parking/revenue/2025-03-01")
    assert response.status_code == 200
    assert response.json()["date"] == "2025-03-01"
    assert response.json()["total_parkings"] == 1

    response = await async_client.get("/api/v1/parking/dashboard")
    assert response.status_code == 200
    dashboard = response.json()
    assert dashboard["today_revenue"]["total_parkings"] == 1
    assert dashboard["active_parkings"] == 0
    assert dashboard["slot_statistics"]["available_slots"] == 1
