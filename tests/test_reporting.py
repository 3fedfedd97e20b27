"""Tests for reports and the dashboard."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.db.models import ParkingSlot, Vehicle
from smartpark.services.payments import PaymentReconciler
from smartpark.services.reports import Reporting
from smartpark.services.sessions import SessionManager
from smartpark.services.slots import SlotRegistry

from tests.conftest import utc

NOW = utc(2025, 3, 1, 18, 0)


@pytest.fixture
async def busy_day(db_session: AsyncSession, slot_a1: ParkingSlot, car_rab123a: Vehicle):
    """Two completed stays and one car still parked, all on 2025-03-01."""
    await SlotRegistry(db_session).create("A2", hourly_rate=Decimal("500"))
    sessions = SessionManager(db_session)
    payments = PaymentReconciler(db_session, clock=lambda: utc(2025, 3, 1, 12, 0))

    first = await sessions.open_session("RAB123A", "A1", "op", entry_time=utc(2025, 3, 1, 10, 0))
    await sessions.close_session(first.record_id, exit_time=utc(2025, 3, 1, 11, 30))
    await payments.record_payment(first.record_id, Decimal("2000"), "op")

    second = await sessions.open_session(
        "RAD777C", "A2", "op", driver_name="Eric", phone_number="0788555444",
        entry_time=utc(2025, 3, 1, 10, 0),
    )
    await sessions.close_session(second.record_id, exit_time=utc(2025, 3, 1, 12, 30))
    await payments.record_payment(second.record_id, Decimal("1500"), "op", payment_method="card")

    await sessions.open_session("RAB123A", "A1", "op", entry_time=utc(2025, 3, 1, 15, 0))


@pytest.mark.asyncio
async def test_reports_on_empty_database(db_session: AsyncSession):
    reports = Reporting(db_session, clock=lambda: NOW)

    stats = await reports.session_statistics()
    assert stats.total_records == 0
    assert stats.active_records == 0
    assert stats.total_revenue == Decimal("0")
    assert stats.avg_duration_minutes == 0.0

    daily = await reports.session_daily_revenue(date(2025, 3, 1))
    assert daily.total_parkings == 0
    assert daily.total_revenue == Decimal("0")

    payment_stats = await reports.payment_statistics()
    assert payment_stats.total_payments == 0
    assert payment_stats.total_amount == Decimal("0")
    assert payment_stats.cash_payments == Decimal("0")

    assert await reports.payment_daily_revenue(date(2025, 3, 1)) == []

    dashboard = await reports.dashboard()
    assert dashboard.active_parkings == 0
    assert dashboard.recent_records == []
    assert dashboard.slot_statistics.total_slots == 0


@pytest.mark.asyncio
async def test_session_statistics(db_session: AsyncSession, busy_day):
    reports = Reporting(db_session, clock=lambda: NOW)

    stats = await reports.session_statistics(date(2025, 3, 1), date(2025, 3, 1))
    assert stats.total_records == 3
    assert stats.active_records == 1
    assert stats.completed_records == 2
    assert stats.total_revenue == Decimal("3500")
    assert stats.avg_duration_minutes == pytest.approx(120.0)

    next_day = await reports.session_statistics(date(2025, 3, 2), date(2025, 3, 2))
    assert next_day.total_records == 0


@pytest.mark.asyncio
async def test_session_daily_revenue(db_session: AsyncSession, busy_day):
    daily = await Reporting(db_session).session_daily_revenue(date(2025, 3, 1))

    assert daily.date == date(2025, 3, 1)
    assert daily.total_parkings == 3
    assert daily.total_revenue == Decimal("3500")


@pytest.mark.asyncio
async def test_payment_reports(db_session: AsyncSession, busy_day):
    reports = Reporting(db_session)

    stats = await reports.payment_statistics(date(2025, 3, 1), date(2025, 3, 1))
    assert stats.total_payments == 2
    assert stats.total_amount == Decimal("3500")
    assert stats.average_amount == Decimal("1750.00")
    assert stats.cash_payments == Decimal("2000")
    assert stats.card_payments == Decimal("1500")
    assert stats.mobile_payments == Decimal("0")

    by_method = await reports.payment_daily_revenue(date(2025, 3, 1))
    assert [(row.payment_method, row.total_payments) for row in by_method] == [("card", 1), ("cash", 1)]
    assert by_method[1].total_revenue == Decimal("2000")


@pytest.mark.asyncio
async def test_failed_payments_are_not_counted(db_session: AsyncSession, busy_day):
    payments = PaymentReconciler(db_session)
    card_payment = (await payments.list_all())[0]
    await payments.update_status(card_payment.payment_id, "failed")

    stats = await Reporting(db_session).payment_statistics()
    assert stats.total_payments == 1


@pytest.mark.asyncio
async def test_dashboard(db_session: AsyncSession, busy_day):
    dashboard = await Reporting(db_session, clock=lambda: NOW).dashboard()

    assert dashboard.today_revenue.total_parkings == 3
    assert dashboard.active_parkings == 1
    assert dashboard.active_records[0].plate_number == "RAB123A"
    assert len(dashboard.recent_records) == 3
    assert dashboard.slot_statistics.occupied_slots == 1
