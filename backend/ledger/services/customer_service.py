import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.database import store_errors
from ledger.errors import NotFound, ValidationError
from ledger.models.customer import Customer
from ledger.schemas.customer import CustomerWrite
from ledger.utils.ids import new_record_id

logger = logging.getLogger(__name__)


def _check_fields(data: CustomerWrite) -> None:
    if not settings.REQUIRE_CUSTOMER_FIELDS:
        return
    blank = [
        field
        for field in ("name", "contact", "phone")
        if not getattr(data, field).strip()
    ]
    if blank:
        raise ValidationError(f"Required fields are empty: {', '.join(blank)}")


async def list_customers(db: AsyncSession) -> list[Customer]:
    async with store_errors(db, "Failed to load customers"):
        result = await db.execute(
            select(Customer).order_by(Customer.created_at.desc())
        )
        return list(result.scalars().all())


async def get_customer(db: AsyncSession, customer_id: str) -> Customer | None:
    async with store_errors(db, "Failed to load customer"):
        return await db.get(Customer, customer_id)


async def create_customer(db: AsyncSession, data: CustomerWrite) -> Customer:
    _check_fields(data)
    customer = Customer(
        id=new_record_id(),
        name=data.name,
        contact=data.contact,
        phone=data.phone,
    )
    async with store_errors(db, "Failed to create customer"):
        db.add(customer)
        await db.commit()
    return customer


async def update_customer(
    db: AsyncSession, customer_id: str, data: CustomerWrite
) -> Customer:
    """Update a customer in place.

    Payments keep their own copy of the customer name; they are not touched.
    """
    _check_fields(data)
    async with store_errors(db, "Failed to update customer"):
        customer = await db.get(Customer, customer_id)
        if customer is None:
            raise NotFound(f"Customer with id {customer_id} not found")
        customer.name = data.name
        customer.contact = data.contact
        customer.phone = data.phone
        await db.commit()
    return customer
