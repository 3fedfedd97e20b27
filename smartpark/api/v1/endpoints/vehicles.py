"""Vehicle endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from smartpark.api.deps import get_operator_id, get_vehicle_registry
from smartpark.schemas.parking_record import ParkingRecordResponse
from smartpark.schemas.vehicle import (
    VehicleCreate,
    VehicleHistory,
    VehicleHistoryEntry,
    VehicleParkingStatus,
    VehicleResponse,
    VehicleUpdate,
)
from smartpark.services.vehicles import VehicleRegistry

router = APIRouter()


@router.post(
    "/",
    response_model=VehicleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_operator_id)],
)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    vehicles: VehicleRegistry = Depends(get_vehicle_registry),
):
    """Register a new vehicle."""
    return await vehicles.create(**vehicle_data.model_dump())


@router.get("/", response_model=List[VehicleResponse])
async def list_vehicles(vehicles: VehicleRegistry = Depends(get_vehicle_registry)):
    """List all vehicles, most recently registered first."""
    return await vehicles.list_all()


@router.get("/search", response_model=List[VehicleResponse])
async def search_vehicles(
    plate_number: Optional[str] = Query(None, description="Part of the plate number"),
    driver_name: Optional[str] = Query(None, description="Part of the driver's name"),
    phone_number: Optional[str] = Query(None, description="Part of the phone number"),
    vehicles: VehicleRegistry = Depends(get_vehicle_registry),
):
    """Search vehicles by plate, driver name or phone number."""
    return await vehicles.search(
        plate_number=plate_number,
        driver_name=driver_name,
        phone_number=phone_number,
    )


@router.get("/{plate_number}", response_model=VehicleResponse)
async def get_vehicle(plate_number: str, vehicles: VehicleRegistry = Depends(get_vehicle_registry)):
    return await vehicles.get(plate_number)


@router.patch(
    "/{plate_number}",
    response_model=VehicleResponse,
    dependencies=[Depends(get_operator_id)],
)
async def update_vehicle(
    plate_number: str,
    vehicle_data: VehicleUpdate,
    vehicles: VehicleRegistry = Depends(get_vehicle_registry),
):
    """Update driver or car details."""
    return await vehicles.update(plate_number, **vehicle_data.model_dump(exclude_unset=True))


@router.delete(
    "/{plate_number}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(get_operator_id)],
)
async def delete_vehicle(plate_number: str, vehicles: VehicleRegistry = Depends(get_vehicle_registry)):
    """Delete a vehicle that is not parked."""
    await vehicles.delete(plate_number)


@router.get("/{plate_number}/history", response_model=VehicleHistory)
async def get_vehicle_history(
    plate_number: str,
    vehicles: VehicleRegistry = Depends(get_vehicle_registry),
):
    """All parking records of a vehicle with the amounts paid."""
    vehicle = await vehicles.get(plate_number)
    entries = await vehicles.history(plate_number)

    return VehicleHistory(
        car=VehicleResponse.model_validate(vehicle),
        history=[
            VehicleHistoryEntry(
                record=ParkingRecordResponse.model_validate(entry.record),
                amount_paid=entry.amount_paid,
                payment_count=entry.payment_count,
            )
            for entry in entries
        ],
    )


@router.get("/{plate_number}/status", response_model=VehicleParkingStatus)
async def get_vehicle_status(
    plate_number: str,
    vehicles: VehicleRegistry = Depends(get_vehicle_registry),
):
    """Whether the vehicle is parked, and where."""
    vehicle = await vehicles.get(plate_number)
    record = await vehicles.active_record(plate_number)

    return VehicleParkingStatus(
        car=VehicleResponse.model_validate(vehicle),
        is_parked=record is not None,
        current_parking=ParkingRecordResponse.model_validate(record) if record else None,
    )
