"""ParkingSlot endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from smartpark.api.deps import get_operator_id, get_slot_registry
from smartpark.schemas.parking_slot import (
    ParkingSlotCreate,
    ParkingSlotResponse,
    ParkingSlotStatusUpdate,
    ParkingSlotUpdate,
    SlotMap,
    SlotStatistics,
)
from smartpark.services.slots import SlotRegistry

router = APIRouter()


@router.post(
    "/",
    response_model=ParkingSlotResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_operator_id)],
)
async def create_parking_slot(
    slot_data: ParkingSlotCreate,
    slots: SlotRegistry = Depends(get_slot_registry),
):
    """Create a new parking slot."""
    return await slots.create(
        slot_data.slot_number,
        slot_type=slot_data.slot_type,
        hourly_rate=slot_data.hourly_rate,
    )


@router.get("/", response_model=List[ParkingSlotResponse])
async def list_parking_slots(slots: SlotRegistry = Depends(get_slot_registry)):
    """List all parking slots ordered by slot number."""
    return await slots.list_all()


@router.get("/available", response_model=List[ParkingSlotResponse])
async def list_available_slots(slots: SlotRegistry = Depends(get_slot_registry)):
    """List slots that can take a car right now."""
    return await slots.list_available()


@router.get("/type/{slot_type}", response_model=List[ParkingSlotResponse])
async def list_slots_by_type(slot_type: str, slots: SlotRegistry = Depends(get_slot_registry)):
    return await slots.list_by_type(slot_type)


@router.get("/statistics", response_model=SlotStatistics)
async def get_slot_statistics(slots: SlotRegistry = Depends(get_slot_registry)):
    return await slots.statistics()


@router.get("/map", response_model=SlotMap)
async def get_slot_map(slots: SlotRegistry = Depends(get_slot_registry)):
    """Slots grouped by section."""
    return await slots.slot_map()


@router.get("/{slot_number}", response_model=ParkingSlotResponse)
async def get_parking_slot(slot_number: str, slots: SlotRegistry = Depends(get_slot_registry)):
    """Get a specific parking slot by number."""
    return await slots.lookup(slot_number)


@router.patch(
    "/{slot_number}",
    response_model=ParkingSlotResponse,
    dependencies=[Depends(get_operator_id)],
)
async def update_parking_slot(
    slot_number: str,
    slot_data: ParkingSlotUpdate,
    slots: SlotRegistry = Depends(get_slot_registry),
):
    """Update a slot's type or hourly rate."""
    update_data = slot_data.model_dump(exclude_unset=True, exclude_none=True)
    return await slots.update(slot_number, **update_data)


@router.patch(
    "/{slot_number}/status",
    response_model=ParkingSlotResponse,
    dependencies=[Depends(get_operator_id)],
)
async def update_slot_status(
    slot_number: str,
    status_data: ParkingSlotStatusUpdate,
    slots: SlotRegistry = Depends(get_slot_registry),
):
    """Administrative status override."""
    return await slots.set_status(slot_number, status_data.status)


@router.delete(
    "/{slot_number}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(get_operator_id)],
)
async def delete_parking_slot(slot_number: str, slots: SlotRegistry = Depends(get_slot_registry)):
    """Delete a parking slot."""
    await slots.delete(slot_number)
