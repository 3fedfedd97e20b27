"""ParkingSlot schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

SLOT_TYPE_PATTERN = "^(regular|vip|disabled)$"
SLOT_STATUS_PATTERN = "^(available|occupied|maintenance)$"


class ParkingSlotBase(BaseModel):
    """Base parking slot schema."""

    slot_number: str = Field(..., min_length=1, max_length=10)
    slot_type: Optional[str] = Field(None, pattern=SLOT_TYPE_PATTERN)
    hourly_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class ParkingSlotCreate(ParkingSlotBase):
    """Schema for creating a parking slot."""

    pass


class ParkingSlotUpdate(BaseModel):
    """Schema for updating a parking slot."""

    slot_type: Optional[str] = Field(None, pattern=SLOT_TYPE_PATTERN)
    hourly_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class ParkingSlotStatusUpdate(BaseModel):
    """Schema for the administrative status override."""

    status: str = Field(..., pattern=SLOT_STATUS_PATTERN)


class ParkingSlotResponse(BaseModel):
    """Schema for parking slot response."""

    slot_number: str
    slot_type: str
    hourly_rate: Decimal
    slot_status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SlotStatistics(BaseModel):
    """Slot counts by status and type."""

    total_slots: int = 0
    available_slots: int = 0
    occupied_slots: int = 0
    maintenance_slots: int = 0
    regular_slots: int = 0
    vip_slots: int = 0
    disabled_slots: int = 0


class SlotMap(BaseModel):
    """Slots grouped by section letter."""

    sections: Dict[str, List[ParkingSlotResponse]]
    total_slots: int
    available_count: int
    occupied_count: int
    maintenance_count: int
