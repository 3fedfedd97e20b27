"""Parking session lifecycle: car entry and car exit.

A parking record is ``active`` from entry until exit and ``completed``
afterwards; it never goes back. While a record is active its slot is
``occupied``. Entry and exit each run in a single transaction that locks the
rows it checks, so the record and the slot always change together.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.db.models import ParkingRecord
from smartpark.db.session import atomic
from smartpark.db.types import as_utc, utcnow
from smartpark.services.exceptions import (
    InvalidExitTime,
    NotFoundError,
    SessionNotActive,
    SlotUnavailable,
    VehicleAlreadyParked,
    VehicleDetailsRequired,
)
from smartpark.services.fees import calculate_fee
from smartpark.services.slots import SlotRegistry
from smartpark.services.vehicles import VehicleRegistry

logger = logging.getLogger(__name__)


def day_bounds(date_from: Optional[date], date_to: Optional[date]):
    """UTC datetimes covering the inclusive calendar date range."""
    start = datetime.combine(date_from, time.min) if date_from else None
    end = datetime.combine(date_to + timedelta(days=1), time.min) if date_to else None
    return (
        as_utc(start) if start else None,
        as_utc(end) if end else None,
    )


class SessionManager:
    """Opens and closes parking records."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock
        self.slots = SlotRegistry(session)
        self.vehicles = VehicleRegistry(session)

    async def open_session(
        self,
        plate_number: str,
        slot_number: str,
        operator_id: str,
        driver_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        car_model: Optional[str] = None,
        car_color: Optional[str] = None,
        entry_time: Optional[datetime] = None,
    ) -> ParkingRecord:
        """
        Record a car entering a slot.

        Unknown vehicles are registered on the way in, which requires the
        driver's name and phone number.

        Raises:
            VehicleDetailsRequired: new vehicle without driver name or phone
            NotFoundError: the slot does not exist
            SlotUnavailable: the slot is occupied or under maintenance
            VehicleAlreadyParked: the vehicle already has an active record
        """
        async with atomic(self.session):
            vehicle = await self.vehicles.find(plate_number, for_update=True)
            if vehicle is None:
                if not driver_name or not phone_number:
                    raise VehicleDetailsRequired(
                        "Driver name and phone number are required for new cars"
                    )
                vehicle = self.vehicles.build(
                    plate_number,
                    driver_name,
                    phone_number,
                    car_model=car_model,
                    car_color=car_color,
                )

            slot = await self.slots.lookup(slot_number, for_update=True)
            if slot.slot_status != "available":
                raise SlotUnavailable(f"Slot {slot_number} is not available ({slot.slot_status})")

            if await self.vehicles.active_record(plate_number) is not None:
                raise VehicleAlreadyParked(f"Car {plate_number} is already parked")

            record = ParkingRecord(
                plate_number=vehicle.plate_number,
                slot_number=slot.slot_number,
                entry_time=as_utc(entry_time) if entry_time else self.clock(),
                status="active",
                created_by=operator_id,
            )
            self.session.add(record)
            slot.slot_status = "occupied"

        logger.info(
            "Car %s entered slot %s (record %s, operator %s)",
            plate_number,
            slot_number,
            record.record_id,
            operator_id,
        )
        return record

    async def close_session(
        self, record_id: int, exit_time: Optional[datetime] = None
    ) -> ParkingRecord:
        """
        Record a car leaving and bill the stay.

        Duration and amount due are computed here, once, from the slot's
        hourly rate, and the slot is released in the same transaction.

        Raises:
            SessionNotActive: no record with this id, or it is already completed
            InvalidExitTime: exit time earlier than entry time
        """
        async with atomic(self.session):
            result = await self.session.execute(
                select(ParkingRecord)
                .where(
                    ParkingRecord.record_id == record_id,
                    ParkingRecord.status == "active",
                )
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise SessionNotActive(f"Active parking record {record_id} not found")

            exit_time = as_utc(exit_time) if exit_time else self.clock()
            if exit_time < record.entry_time:
                raise InvalidExitTime(
                    f"Exit time {exit_time.isoformat()} is before entry time "
                    f"{record.entry_time.isoformat()}"
                )

            slot = await self.slots.lookup(record.slot_number, for_update=True)
            quote = calculate_fee(record.entry_time, exit_time, slot.hourly_rate)

            record.exit_time = exit_time
            record.duration_minutes = quote.duration_minutes
            record.total_amount = quote.amount_due
            record.status = "completed"
            slot.slot_status = "available"

        logger.info(
            "Car %s left slot %s after %d min, amount due %s (record %s)",
            record.plate_number,
            record.slot_number,
            quote.duration_minutes,
            quote.amount_due,
            record_id,
        )
        return record

    async def get(self, record_id: int) -> ParkingRecord:
        result = await self.session.execute(
            select(ParkingRecord)
            .where(ParkingRecord.record_id == record_id)
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()

        if not record:
            raise NotFoundError(f"Parking record {record_id} not found")

        return record

    async def list_all(self) -> List[ParkingRecord]:
        return await self.search()

    async def list_active(self) -> List[ParkingRecord]:
        return await self.search(status="active")

    async def search(
        self,
        plate_number: Optional[str] = None,
        slot_number: Optional[str] = None,
        status: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[ParkingRecord]:
        """Filter records, newest entry first. Dates are inclusive, on entry time."""
        query = (
            select(ParkingRecord)
            .order_by(ParkingRecord.entry_time.desc(), ParkingRecord.record_id.desc())
            .execution_options(populate_existing=True)
        )

        if plate_number:
            query = query.where(ParkingRecord.plate_number.contains(plate_number, autoescape=True))
        if slot_number:
            query = query.where(ParkingRecord.slot_number == slot_number)
        if status:
            query = query.where(ParkingRecord.status == status)

        start, end = day_bounds(date_from, date_to)
        if start:
            query = query.where(ParkingRecord.entry_time >= start)
        if end:
            query = query.where(ParkingRecord.entry_time < end)
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
