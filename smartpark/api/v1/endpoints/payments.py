"""Payment endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from smartpark.api.deps import get_operator_id, get_payment_reconciler, get_reporting
from smartpark.schemas.payment import (
    Invoice,
    PaymentCreate,
    PaymentResponse,
    PaymentStatusUpdate,
)
from smartpark.schemas.report import PaymentMethodRevenue, PaymentStatistics
from smartpark.services.payments import PaymentReconciler
from smartpark.services.reports import Reporting

router = APIRouter()


@router.post("/", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment_data: PaymentCreate,
    operator_id: str = Depends(get_operator_id),
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    """Record a payment for a completed parking record."""
    return await payments.record_payment(
        record_id=payment_data.record_id,
        amount_paid=payment_data.amount_paid,
        operator_id=operator_id,
        payment_method=payment_data.payment_method,
    )


@router.get("/", response_model=List[PaymentResponse])
async def list_payments(payments: PaymentReconciler = Depends(get_payment_reconciler)):
    """List all payments, most recent first."""
    return await payments.list_all()


@router.get("/statistics", response_model=PaymentStatistics)
async def get_payment_statistics(
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    reports: Reporting = Depends(get_reporting),
):
    """Totals of completed payments, per method."""
    return await reports.payment_statistics(date_from, date_to)


@router.get("/range", response_model=List[PaymentResponse])
async def list_payments_by_date_range(
    date_from: date = Query(..., description="First payment date, inclusive"),
    date_to: date = Query(..., description="Last payment date, inclusive"),
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    return await payments.list_by_date_range(date_from, date_to)


@router.get("/revenue/{day}", response_model=List[PaymentMethodRevenue])
async def get_daily_payment_revenue(day: date, reports: Reporting = Depends(get_reporting)):
    """Completed payments on the given day, one row per payment method."""
    return await reports.payment_daily_revenue(day)


@router.get("/receipt/{receipt_number}", response_model=PaymentResponse)
async def get_payment_by_receipt(
    receipt_number: str,
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    return await payments.get_by_receipt(receipt_number)


@router.get("/record/{record_id}", response_model=List[PaymentResponse])
async def list_payments_for_record(
    record_id: int,
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    """Payments made against one parking record."""
    return await payments.list_for_session(record_id)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    """Get a specific payment by ID."""
    return await payments.get(payment_id)


@router.patch(
    "/{payment_id}/status",
    response_model=PaymentResponse,
    dependencies=[Depends(get_operator_id)],
)
async def update_payment_status(
    payment_id: int,
    status_data: PaymentStatusUpdate,
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    return await payments.update_status(payment_id, status_data.status)


@router.get("/{payment_id}/invoice", response_model=Invoice)
async def get_payment_invoice(
    payment_id: int,
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    """Invoice for a payment, with parking and vehicle details."""
    return await payments.generate_receipt(payment_id)


@router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(get_operator_id)],
)
async def delete_payment(
    payment_id: int,
    payments: PaymentReconciler = Depends(get_payment_reconciler),
):
    """Delete a payment."""
    await payments.delete(payment_id)
