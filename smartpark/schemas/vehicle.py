"""Vehicle schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from smartpark.schemas.parking_record import ParkingRecordResponse


class VehicleBase(BaseModel):
    """Base vehicle schema."""

    driver_name: str = Field(..., min_length=1, max_length=100)
    phone_number: str = Field(..., min_length=1, max_length=20)
    car_model: Optional[str] = Field(None, max_length=50)
    car_color: Optional[str] = Field(None, max_length=30)


class VehicleCreate(VehicleBase):
    """Schema for registering a vehicle."""

    plate_number: str = Field(..., min_length=1, max_length=20)


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle."""

    driver_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, min_length=1, max_length=20)
    car_model: Optional[str] = Field(None, max_length=50)
    car_color: Optional[str] = Field(None, max_length=30)


class VehicleResponse(VehicleBase):
    """Schema for vehicle response."""

    plate_number: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VehicleHistoryEntry(BaseModel):
    """One parking record in a vehicle's history."""

    record: ParkingRecordResponse
    amount_paid: Optional[Decimal] = None
    payment_count: int = 0

    model_config = {"from_attributes": True}


class VehicleHistory(BaseModel):
    """A vehicle and all of its parking records."""

    car: VehicleResponse
    history: List[VehicleHistoryEntry]


class VehicleParkingStatus(BaseModel):
    """Whether a vehicle is parked right now."""

    car: VehicleResponse
    is_parked: bool
    current_parking: Optional[ParkingRecordResponse] = None
