"""Payment ledger and the verification workflow.

A payment starts ``Unverified``. ``verify_payments`` moves a batch to
``Verified`` and stamps a business date and remark on every row in one UPDATE
statement, so the store either applies the whole batch or none of it.
``undo_verification`` moves a single payment back and clears both fields.

Ids that do not exist are skipped by the UPDATE itself and are not reported
as errors, for both operations.
"""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.database import store_errors
from ledger.errors import NotFound, ValidationError
from ledger.models.customer import Customer
from ledger.models.payment import Payment, PaymentStatus
from ledger.schemas.payment import PaymentCreate, PaymentUpdate
from ledger.services import customer_service
from ledger.utils.ids import new_record_id

logger = logging.getLogger(__name__)


# --- Policy checks ---


async def _check_policies(db: AsyncSession, data: PaymentCreate) -> None:
    if settings.REJECT_NEGATIVE_AMOUNTS and data.amount < 0:
        raise ValidationError("Amount must not be negative")
    if settings.REQUIRE_EXISTING_CUSTOMER:
        customer = await customer_service.get_customer(db, data.customer_id)
        if customer is None:
            raise NotFound(f"Customer with id {data.customer_id} not found")


def _verification_fields(data: PaymentUpdate) -> tuple[str | None, str | None]:
    """Return the (business_date, remarks) pair to store for an update."""
    if not settings.ENFORCE_VERIFICATION_INVARIANT:
        return data.business_date, data.remarks
    if data.status is PaymentStatus.VERIFIED:
        if not data.business_date:
            raise ValidationError("A verified payment requires a business date")
        return data.business_date, data.remarks
    return None, None


# --- Queries ---


async def list_payments(
    db: AsyncSession, status: PaymentStatus | None = None
) -> list[Payment]:
    """All payments, newest ``date`` first.

    ``date`` is compared as a string, so only zero-padded ISO dates sort in
    calendar order.
    """
    query = select(Payment)
    if status is not None:
        query = query.where(Payment.status == status)
    query = query.order_by(Payment.date.desc(), Payment.created_at.desc())
    async with store_errors(db, "Failed to load payments"):
        result = await db.execute(query)
        return list(result.scalars().all())


async def get_payment(db: AsyncSession, payment_id: str) -> Payment:
    async with store_errors(db, "Failed to load payment"):
        payment = await db.get(Payment, payment_id)
    if payment is None:
        raise NotFound(f"Payment with id {payment_id} not found")
    return payment


# --- Lifecycle ---


async def create_payment(db: AsyncSession, data: PaymentCreate) -> Payment:
    async with store_errors(db, "Failed to create payment"):
        await _check_policies(db, data)
        payment = Payment(
            id=new_record_id(),
            date=data.date,
            customer_id=data.customer_id,
            customer_name=data.customer_name,
            amount=data.amount,
            status=PaymentStatus.UNVERIFIED,
            business_date=None,
            remarks=None,
        )
        db.add(payment)
        await db.commit()
    logger.info("Payment %s created for customer %s", payment.id, payment.customer_id)
    return payment


async def update_payment(
    db: AsyncSession, payment_id: str, data: PaymentUpdate
) -> Payment:
    """Replace every editable field of a payment.

    This path may set ``status`` directly. With ENFORCE_VERIFICATION_INVARIANT
    off it stores whatever it is given, including a status that disagrees with
    ``business_date``.
    """
    business_date, remarks = _verification_fields(data)
    async with store_errors(db, "Failed to update payment"):
        payment = await db.get(Payment, payment_id)
        if payment is None:
            raise NotFound(f"Payment with id {payment_id} not found")
        await _check_policies(db, data)

        payment.date = data.date
        payment.customer_id = data.customer_id
        payment.customer_name = data.customer_name
        payment.amount = data.amount
        payment.status = data.status
        payment.business_date = business_date
        payment.remarks = remarks
        await db.commit()
    return payment


async def delete_payment(db: AsyncSession, payment_id: str) -> int:
    """Delete a payment whatever its status. Returns rows removed (0 or 1)."""
    async with store_errors(db, "Failed to delete payment"):
        result = await db.execute(delete(Payment).where(Payment.id == payment_id))
        await db.commit()
    return result.rowcount


# --- Verification ---


async def verify_payments(
    db: AsyncSession,
    ids: list[str],
    business_date: str,
    remarks: str | None,
) -> int:
    """Mark every payment in ``ids`` as verified, all or nothing.

    Returns the number of rows the store reports as changed. Unknown ids are
    ignored, so this can be lower than ``len(set(ids))``.
    """
    if not business_date:
        raise ValidationError("Business date is required")
    unique_ids = list(dict.fromkeys(ids))
    if not unique_ids:
        return 0

    async with store_errors(db, "Failed to verify payments"):
        result = await db.execute(
            update(Payment)
            .where(Payment.id.in_(unique_ids))
            .values(
                status=PaymentStatus.VERIFIED,
                business_date=business_date,
                remarks=remarks,
            )
        )
        await db.commit()

    count = result.rowcount
    logger.info(
        "Verified %d of %d payments (business date %s)",
        count, len(unique_ids), business_date,
    )
    return count


async def undo_verification(db: AsyncSession, payment_id: str) -> int:
    """Return one payment to ``Unverified`` and clear date and remarks.

    Idempotent. Returns 0 when the id does not exist.
    """
    async with store_errors(db, "Failed to undo verification"):
        result = await db.execute(
            update(Payment)
            .where(Payment.id == payment_id)
            .values(
                status=PaymentStatus.UNVERIFIED,
                business_date=None,
                remarks=None,
            )
        )
        await db.commit()

    if result.rowcount:
        logger.info("Verification undone for payment %s", payment_id)
    return result.rowcount


# --- Referential integrity ---


async def integrity_report(db: AsyncSession) -> dict:
    """Compare payments against the customer directory. Read only.

    Orphaned payments point at a customer id that does not exist. Stale names
    are payments whose copied customer name no longer matches the customer.
    """
    async with store_errors(db, "Failed to check payments"):
        result = await db.execute(
            select(
                Payment.id,
                Payment.customer_id,
                Payment.customer_name,
                Customer.id.label("found_id"),
                Customer.name.label("current_name"),
            )
            .outerjoin(Customer, Customer.id == Payment.customer_id)
            .order_by(Payment.date.desc(), Payment.id)
        )
        rows = result.all()

    orphaned = []
    stale = []
    for row in rows:
        if row.found_id is None:
            orphaned.append(row.id)
        elif row.customer_name != row.current_name:
            stale.append({
                "payment_id": row.id,
                "customer_id": row.customer_id,
                "customer_name": row.customer_name,
                "current_name": row.current_name,
            })
    return {"orphaned_payments": orphaned, "stale_customer_names": stale}
