"""ParkingRecord schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CarEntryRequest(BaseModel):
    """Schema for a car entering the lot.

    Driver details are only needed the first time a plate is seen.
    """

    plate_number: str = Field(..., min_length=1, max_length=20)
    slot_number: str = Field(..., min_length=1, max_length=10)
    driver_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, min_length=1, max_length=20)
    car_model: Optional[str] = Field(None, max_length=50)
    car_color: Optional[str] = Field(None, max_length=30)
    entry_time: Optional[datetime] = None


class CarExitRequest(BaseModel):
    """Schema for a car leaving the lot."""

    exit_time: Optional[datetime] = None


class ParkingRecordResponse(BaseModel):
    """Schema for parking record response."""

    record_id: int
    plate_number: str
    slot_number: str
    entry_time: datetime
    exit_time: Optional[datetime]
    duration_minutes: Optional[int]
    total_amount: Optional[Decimal]
    status: str
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
