"""Reporting schemas."""

import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel

from smartpark.schemas.parking_record import ParkingRecordResponse
from smartpark.schemas.parking_slot import SlotStatistics


class ParkingStatistics(BaseModel):
    """Rollup over parking records."""

    total_records: int = 0
    active_records: int = 0
    completed_records: int = 0
    total_revenue: Decimal = Decimal("0")
    avg_duration_minutes: float = 0.0


class ParkingDailyRevenue(BaseModel):
    """Parking records entered on one day."""

    date: datetime.date
    total_parkings: int = 0
    total_revenue: Decimal = Decimal("0")
    avg_duration: float = 0.0


class PaymentStatistics(BaseModel):
    """Rollup over completed payments."""

    total_payments: int = 0
    total_amount: Decimal = Decimal("0")
    average_amount: Decimal = Decimal("0")
    cash_payments: Decimal = Decimal("0")
    card_payments: Decimal = Decimal("0")
    mobile_payments: Decimal = Decimal("0")


class PaymentMethodRevenue(BaseModel):
    """Completed payments for one method on one day."""

    date: datetime.date
    payment_method: str
    total_payments: int
    total_revenue: Decimal


class Dashboard(BaseModel):
    """Front page figures."""

    today_revenue: ParkingDailyRevenue
    slot_statistics: SlotStatistics
    active_parkings: int
    recent_records: List[ParkingRecordResponse]
    active_records: List[ParkingRecordResponse]
