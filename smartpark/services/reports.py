"""Read-only rollups over parking records and payments."""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.config import settings
from smartpark.db.models import ParkingRecord, Payment
from smartpark.db.types import utcnow
from smartpark.schemas.parking_record import ParkingRecordResponse
from smartpark.schemas.report import (
    Dashboard,
    ParkingDailyRevenue,
    ParkingStatistics,
    PaymentMethodRevenue,
    PaymentStatistics,
)
from smartpark.services.sessions import SessionManager, day_bounds
from smartpark.services.slots import SlotRegistry


def _sum_where(condition, value):
    return func.coalesce(func.sum(case((condition, value), else_=0)), 0)


def _decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def _float(value) -> float:
    return float(value) if value is not None else 0.0


class Reporting:
    """Statistics and revenue reports. Empty periods give zeroed figures."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock

    async def session_statistics(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> ParkingStatistics:
        """Counts, revenue and average duration of records entered in the range."""
        query = select(
            func.count(ParkingRecord.record_id),
            _sum_where(ParkingRecord.status == "active", 1),
            _sum_where(ParkingRecord.status == "completed", 1),
            func.sum(ParkingRecord.total_amount),
            func.avg(ParkingRecord.duration_minutes),
        )

        start, end = day_bounds(date_from, date_to)
        if start:
            query = query.where(ParkingRecord.entry_time >= start)
        if end:
            query = query.where(ParkingRecord.entry_time < end)

        total, active, completed, revenue, avg_duration = (await self.session.execute(query)).one()
        return ParkingStatistics(
            total_records=total or 0,
            active_records=int(active or 0),
            completed_records=int(completed or 0),
            total_revenue=_decimal(revenue),
            avg_duration_minutes=_float(avg_duration),
        )

    async def session_daily_revenue(self, day: date) -> ParkingDailyRevenue:
        """Records entered on ``day``: how many, billed amount and average stay."""
        start, end = day_bounds(day, day)
        total, revenue, avg_duration = (
            await self.session.execute(
                select(
                    func.count(ParkingRecord.record_id),
                    func.sum(ParkingRecord.total_amount),
                    func.avg(ParkingRecord.duration_minutes),
                ).where(ParkingRecord.entry_time >= start, ParkingRecord.entry_time < end)
            )
        ).one()

        return ParkingDailyRevenue(
            date=day,
            total_parkings=total or 0,
            total_revenue=_decimal(revenue),
            avg_duration=_float(avg_duration),
        )

    async def payment_statistics(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> PaymentStatistics:
        """Totals of completed payments, overall and per payment method."""
        query = select(
            func.count(Payment.payment_id),
            func.sum(Payment.amount_paid),
            func.avg(Payment.amount_paid),
            _sum_where(Payment.payment_method == "cash", Payment.amount_paid),
            _sum_where(Payment.payment_method == "card", Payment.amount_paid),
            _sum_where(Payment.payment_method == "mobile_money", Payment.amount_paid),
        ).where(Payment.payment_status == "completed")

        start, end = day_bounds(date_from, date_to)
        if start:
            query = query.where(Payment.payment_date >= start)
        if end:
            query = query.where(Payment.payment_date < end)

        total, amount, average, cash, card, mobile = (await self.session.execute(query)).one()
        return PaymentStatistics(
            total_payments=total or 0,
            total_amount=_decimal(amount),
            average_amount=_decimal(average).quantize(Decimal("0.01")),
            cash_payments=_decimal(cash),
            card_payments=_decimal(card),
            mobile_payments=_decimal(mobile),
        )

    async def payment_daily_revenue(self, day: date) -> List[PaymentMethodRevenue]:
        """Completed payments made on ``day``, one row per payment method."""
        start, end = day_bounds(day, day)
        result = await self.session.execute(
            select(
                Payment.payment_method,
                func.count(Payment.payment_id),
                func.sum(Payment.amount_paid),
            )
            .where(
                Payment.payment_status == "completed",
                Payment.payment_date >= start,
                Payment.payment_date < end,
            )
            .group_by(Payment.payment_method)
            .order_by(Payment.payment_method)
        )

        return [
            PaymentMethodRevenue(
                date=day,
                payment_method=method,
                total_payments=count,
                total_revenue=_decimal(revenue),
            )
            for method, count, revenue in result.all()
        ]

    async def dashboard(self) -> Dashboard:
        sessions = SessionManager(self.session, clock=self.clock)
        today = self.clock().date()

        today_revenue = await self.session_daily_revenue(today)
        slot_statistics = await SlotRegistry(self.session).statistics()
        active = await sessions.list_active()
        recent = await sessions.search(limit=settings.RECENT_RECORDS_LIMIT)

        return Dashboard(
            today_revenue=today_revenue,
            slot_statistics=slot_statistics,
            active_parkings=len(active),
            recent_records=[ParkingRecordResponse.model_validate(r) for r in recent],
            active_records=[ParkingRecordResponse.model_validate(r) for r in active],
        )
