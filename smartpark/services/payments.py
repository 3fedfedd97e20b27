"""Payment reconciliation, receipt numbers and invoices."""

import logging
import secrets
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.config import settings
from smartpark.db.models import ParkingRecord, ParkingSlot, Payment, Vehicle
from smartpark.db.session import atomic
from smartpark.db.types import utcnow
from smartpark.schemas.payment import Invoice, InvoiceCompany, InvoiceParking, InvoicePayment
from smartpark.services.exceptions import (
    InsufficientPayment,
    NotFoundError,
    SessionStillActive,
    StorageFailure,
)
from smartpark.services.fees import format_duration
from smartpark.services.sessions import day_bounds

logger = logging.getLogger(__name__)


def generate_receipt_number(when: datetime) -> str:
    """Receipt number such as ``RCP-20250301-9F2C41AB``."""
    return f"{settings.RECEIPT_PREFIX}-{when:%Y%m%d}-{secrets.token_hex(4).upper()}"


class PaymentReconciler:
    """Records payments against completed parking records."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock

    async def record_payment(
        self,
        record_id: int,
        amount_paid: Decimal,
        operator_id: str,
        payment_method: Optional[str] = None,
    ) -> Payment:
        """
        Record a payment for a completed parking record.

        The amount paid must cover the record's full amount due; partial
        payments are refused. Several payments may be recorded against the
        same record. Session and slot state are left untouched.

        Raises:
            NotFoundError: the parking record does not exist
            SessionStillActive: the car has not exited yet, nothing is due
            InsufficientPayment: amount paid is below the amount due
        """
        async with atomic(self.session):
            result = await self.session.execute(
                select(ParkingRecord)
                .where(ParkingRecord.record_id == record_id)
                .execution_options(populate_existing=True)
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError(f"Parking record {record_id} not found")

            if record.status != "completed" or record.total_amount is None:
                raise SessionStillActive(
                    f"Parking record {record_id} is still active; record the exit first"
                )

            if Decimal(amount_paid) < record.total_amount:
                raise InsufficientPayment(
                    f"Payment amount {amount_paid} is less than total amount due "
                    f"{record.total_amount}"
                )

            payment = await self._insert_with_unique_receipt(
                record_id=record_id,
                amount_paid=amount_paid,
                payment_method=payment_method or settings.DEFAULT_PAYMENT_METHOD,
                created_by=operator_id,
            )

        logger.info(
            "Payment %s of %s (%s) recorded for record %s",
            payment.receipt_number,
            payment.amount_paid,
            payment.payment_method,
            record_id,
        )
        return payment

    async def _insert_with_unique_receipt(self, **fields) -> Payment:
        # Receipt uniqueness is enforced by the store; a clash is retried
        # inside a savepoint so the surrounding transaction survives.
        for attempt in range(1, settings.RECEIPT_MAX_ATTEMPTS + 1):
            payment_date = self.clock()
            payment = Payment(
                payment_date=payment_date,
                payment_status="completed",
                receipt_number=generate_receipt_number(payment_date),
                **fields,
            )
            try:
                async with self.session.begin_nested():
                    self.session.add(payment)
            except IntegrityError:
                logger.warning(
                    "Receipt number %s already taken (attempt %d)",
                    payment.receipt_number,
                    attempt,
                )
                continue
            return payment

        raise StorageFailure("Could not allocate a unique receipt number")

    async def get(self, payment_id: int) -> Payment:
        result = await self.session.execute(
            select(Payment)
            .where(Payment.payment_id == payment_id)
            .execution_options(populate_existing=True)
        )
        payment = result.scalar_one_or_none()

        if not payment:
            raise NotFoundError(f"Payment {payment_id} not found")

        return payment

    async def get_by_receipt(self, receipt_number: str) -> Payment:
        result = await self.session.execute(
            select(Payment).where(Payment.receipt_number == receipt_number)
        )
        payment = result.scalar_one_or_none()

        if not payment:
            raise NotFoundError(f"Payment with receipt {receipt_number} not found")

        return payment

    async def list_all(self) -> List[Payment]:
        result = await self.session.execute(
            select(Payment).order_by(Payment.payment_date.desc(), Payment.payment_id.desc())
        )
        return list(result.scalars().all())

    async def list_for_session(self, record_id: int) -> List[Payment]:
        result = await self.session.execute(
            select(Payment)
            .where(Payment.record_id == record_id)
            .order_by(Payment.payment_date.desc(), Payment.payment_id.desc())
        )
        return list(result.scalars().all())

    async def list_by_date_range(self, date_from: date, date_to: date) -> List[Payment]:
        """Payments made between two calendar dates, both inclusive."""
        start, end = day_bounds(date_from, date_to)
        result = await self.session.execute(
            select(Payment)
            .where(Payment.payment_date >= start, Payment.payment_date < end)
            .order_by(Payment.payment_date.desc(), Payment.payment_id.desc())
        )
        return list(result.scalars().all())

    async def update_status(self, payment_id: int, payment_status: str) -> Payment:
        async with atomic(self.session):
            payment = await self.get(payment_id)
            payment.payment_status = payment_status

        logger.info("Payment %s status set to %s", payment.receipt_number, payment_status)
        return payment

    async def delete(self, payment_id: int) -> None:
        async with atomic(self.session):
            payment = await self.get(payment_id)
            await self.session.delete(payment)

        logger.info("Deleted payment %s", payment_id)

    async def generate_receipt(self, payment_id: int) -> Invoice:
        """
        Assemble the invoice for a payment.

        Combines the payment with its parking record, vehicle and slot. The
        duration is shown in hours and minutes from the stored entry and exit
        times.
        """
        result = await self.session.execute(
            select(Payment, ParkingRecord, Vehicle, ParkingSlot)
            .join(ParkingRecord, ParkingRecord.record_id == Payment.record_id)
            .outerjoin(Vehicle, Vehicle.plate_number == ParkingRecord.plate_number)
            .outerjoin(ParkingSlot, ParkingSlot.slot_number == ParkingRecord.slot_number)
            .where(Payment.payment_id == payment_id)
        )
        row = result.one_or_none()
        if row is None:
            raise NotFoundError(f"Payment {payment_id} not found")

        payment, record, vehicle, slot = row
        duration = (
            format_duration(record.entry_time, record.exit_time) if record.exit_time else None
        )

        return Invoice(
            company=InvoiceCompany(
                name=settings.COMPANY_NAME,
                location=settings.COMPANY_LOCATION,
            ),
            payment=InvoicePayment(
                receipt_number=payment.receipt_number,
                payment_date=payment.payment_date,
                amount_paid=payment.amount_paid,
                payment_method=payment.payment_method,
            ),
            parking=InvoiceParking(
                plate_number=record.plate_number,
                driver_name=vehicle.driver_name if vehicle else None,
                phone_number=vehicle.phone_number if vehicle else None,
                slot_number=record.slot_number,
                slot_type=slot.slot_type if slot else None,
                entry_time=record.entry_time,
                exit_time=record.exit_time,
                duration=duration,
                total_amount=record.total_amount,
            ),
            processed_by=payment.created_by,
            generated_at=self.clock(),
        )
