"""Schemas package."""

from smartpark.schemas.parking_record import (
    CarEntryRequest,
    CarExitRequest,
    ParkingRecordResponse,
)
from smartpark.schemas.parking_slot import (
    ParkingSlotCreate,
    ParkingSlotResponse,
    ParkingSlotStatusUpdate,
    ParkingSlotUpdate,
    SlotMap,
    SlotStatistics,
)
from smartpark.schemas.payment import Invoice, PaymentCreate, PaymentResponse, PaymentStatusUpdate
from smartpark.schemas.report import (
    Dashboard,
    ParkingDailyRevenue,
    ParkingStatistics,
    PaymentMethodRevenue,
    PaymentStatistics,
)
from smartpark.schemas.vehicle import (
    VehicleCreate,
    VehicleHistory,
    VehicleParkingStatus,
    VehicleResponse,
    VehicleUpdate,
)

__all__ = [
    "CarEntryRequest",
    "CarExitRequest",
    "ParkingRecordResponse",
    "ParkingSlotCreate",
    "ParkingSlotResponse",
    "ParkingSlotStatusUpdate",
    "ParkingSlotUpdate",
    "SlotMap",
    "SlotStatistics",
    "Invoice",
    "PaymentCreate",
    "PaymentResponse",
    "PaymentStatusUpdate",
    "Dashboard",
    "ParkingDailyRevenue",
    "ParkingStatistics",
    "PaymentMethodRevenue",
    "PaymentStatistics",
    "VehicleCreate",
    "VehicleHistory",
    "VehicleParkingStatus",
    "VehicleResponse",
    "VehicleUpdate",
]
