"""Payment schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

PAYMENT_METHOD_PATTERN = "^(cash|card|mobile_money)$"
PAYMENT_STATUS_PATTERN = "^(pending|completed|failed)$"


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""

    record_id: int
    amount_paid: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    payment_method: Optional[str] = Field(None, pattern=PAYMENT_METHOD_PATTERN)


class PaymentStatusUpdate(BaseModel):
    """Schema for changing a payment's settlement status."""

    status: str = Field(..., pattern=PAYMENT_STATUS_PATTERN)


class PaymentResponse(BaseModel):
    """Schema for payment response."""

    payment_id: int
    record_id: int
    amount_paid: Decimal
    payment_method: str
    payment_date: datetime
    payment_status: str
    receipt_number: str
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}


class InvoiceCompany(BaseModel):
    name: str
    location: str


class InvoicePayment(BaseModel):
    receipt_number: str
    payment_date: datetime
    amount_paid: Decimal
    payment_method: str


class InvoiceParking(BaseModel):
    plate_number: str
    driver_name: Optional[str] = None
    phone_number: Optional[str] = None
    slot_number: str
    slot_type: Optional[str] = None
    entry_time: datetime
    exit_time: Optional[datetime] = None
    duration: Optional[str] = None
    total_amount: Optional[Decimal] = None


class Invoice(BaseModel):
    """Human readable invoice for one payment."""

    company: InvoiceCompany
    payment: InvoicePayment
    parking: InvoiceParking
    processed_by: str
    generated_at: datetime
