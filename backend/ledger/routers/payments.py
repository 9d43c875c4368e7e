from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.models.payment import PaymentStatus
from ledger.schemas.common import SuccessResponse
from ledger.schemas.payment import (
    IntegrityReport,
    PaymentCreate,
    PaymentResponse,
    PaymentUpdate,
    VerifyRequest,
)
from ledger.services import payment_service

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("")
async def list_payments(
    status: PaymentStatus | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> list[PaymentResponse]:
    payments = await payment_service.list_payments(db, status)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/integrity")
async def get_integrity_report(
    db: AsyncSession = Depends(get_db),
) -> IntegrityReport:
    """Orphaned payments and payments whose copied customer name is stale."""
    report = await payment_service.integrity_report(db)
    return IntegrityReport.model_validate(report)


@router.post("/verify")
async def verify_payments(
    body: VerifyRequest,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    await payment_service.verify_payments(
        db, body.ids, body.business_date, body.remarks
    )
    return SuccessResponse()


@router.get("/{payment_id}")
async def get_payment(
    payment_id: str,
    db: AsyncSession = Depends(get_db),
) -> PaymentResponse:
    payment = await payment_service.get_payment(db, payment_id)
    return PaymentResponse.model_validate(payment)


@router.post("")
async def create_payment(
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
) -> PaymentResponse:
    payment = await payment_service.create_payment(db, body)
    return PaymentResponse.model_validate(payment)


@router.put("/{payment_id}")
async def update_payment(
    payment_id: str,
    body: PaymentUpdate,
    db: AsyncSession = Depends(get_db),
) -> PaymentResponse:
    payment = await payment_service.update_payment(db, payment_id, body)
    return PaymentResponse.model_validate(payment)


@router.delete("/{payment_id}")
async def delete_payment(
    payment_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    await payment_service.delete_payment(db, payment_id)
    return SuccessResponse()


@router.post("/{payment_id}/undo-verification")
async def undo_verification(
    payment_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    await payment_service.undo_verification(db, payment_id)
    return SuccessResponse()
