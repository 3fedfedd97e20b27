"""Parking record endpoints: entry, exit, lookups and reports."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from smartpark.api.deps import get_operator_id, get_reporting, get_session_manager
from smartpark.schemas.parking_record import (
    CarEntryRequest,
    CarExitRequest,
    ParkingRecordResponse,
)
from smartpark.schemas.report import Dashboard, ParkingDailyRevenue, ParkingStatistics
from smartpark.services.reports import Reporting
from smartpark.services.sessions import SessionManager

router = APIRouter()


@router.post("/entry", response_model=ParkingRecordResponse, status_code=status.HTTP_201_CREATED)
async def record_car_entry(
    entry_data: CarEntryRequest,
    operator_id: str = Depends(get_operator_id),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Record a car entering a slot, registering the car if it is new."""
    return await sessions.open_session(operator_id=operator_id, **entry_data.model_dump())


@router.post(
    "/{record_id}/exit",
    response_model=ParkingRecordResponse,
    dependencies=[Depends(get_operator_id)],
)
async def record_car_exit(
    record_id: int,
    exit_data: Optional[CarExitRequest] = None,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Record a car leaving; the response carries duration and amount due."""
    exit_time = exit_data.exit_time if exit_data else None
    return await sessions.close_session(record_id, exit_time=exit_time)


@router.get("/", response_model=List[ParkingRecordResponse])
async def list_parking_records(sessions: SessionManager = Depends(get_session_manager)):
    """List all parking records, newest entry first."""
    return await sessions.list_all()


@router.get("/active", response_model=List[ParkingRecordResponse])
async def list_active_records(sessions: SessionManager = Depends(get_session_manager)):
    """Cars currently parked."""
    return await sessions.list_active()


@router.get("/search", response_model=List[ParkingRecordResponse])
async def search_parking_records(
    plate_number: Optional[str] = Query(None, description="Part of the plate number"),
    slot_number: Optional[str] = Query(None),
    status: Optional[str] = Query(None, pattern="^(active|completed)$"),
    date_from: Optional[date] = Query(None, description="First entry date, inclusive"),
    date_to: Optional[date] = Query(None, description="Last entry date, inclusive"),
    sessions: SessionManager = Depends(get_session_manager),
):
    return await sessions.search(
        plate_number=plate_number,
        slot_number=slot_number,
        status=status,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/statistics", response_model=ParkingStatistics)
async def get_parking_statistics(
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    reports: Reporting = Depends(get_reporting),
):
    return await reports.session_statistics(date_from, date_to)


@router.get("/revenue/{day}", response_model=ParkingDailyRevenue)
async def get_daily_revenue(day: date, reports: Reporting = Depends(get_reporting)):
    """Parkings entered on the given day and their billed amount."""
    return await reports.session_daily_revenue(day)


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(reports: Reporting = Depends(get_reporting)):
    return await reports.dashboard()


@router.get("/{record_id}", response_model=ParkingRecordResponse)
async def get_parking_record(
    record_id: int,
    sessions: SessionManager = Depends(get_session_manager),
):
    """Get a specific parking record by ID."""
    return await sessions.get(record_id)
