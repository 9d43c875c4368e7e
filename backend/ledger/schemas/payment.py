from datetime import datetime
from decimal import Decimal

from pydantic import Field

from ledger.models.payment import PaymentStatus
from ledger.schemas.common import CamelModel


class PaymentCreate(CamelModel):
    date: str = Field(..., min_length=1, max_length=32)
    customer_id: str = Field(..., max_length=40)
    customer_name: str = Field(..., max_length=200)
    amount: Decimal


class PaymentUpdate(PaymentCreate):
    status: PaymentStatus
    business_date: str | None = Field(None, max_length=32)
    remarks: str | None = None


class PaymentResponse(CamelModel):
    id: str
    date: str
    customer_id: str
    customer_name: str
    amount: Decimal
    status: PaymentStatus
    business_date: str | None
    remarks: str | None
    created_at: datetime


class VerifyRequest(CamelModel):
    ids: list[str]
    business_date: str = Field(..., min_length=1, max_length=32)
    remarks: str | None = None


class StaleCustomerName(CamelModel):
    payment_id: str
    customer_id: str
    customer_name: str
    current_name: str


class IntegrityReport(CamelModel):
    orphaned_payments: list[str]
    stale_customer_names: list[StaleCustomerName]
