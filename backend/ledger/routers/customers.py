from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.schemas.customer import CustomerResponse, CustomerWrite
from ledger.services import customer_service

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("")
async def list_customers(
    db: AsyncSession = Depends(get_db),
) -> list[CustomerResponse]:
    customers = await customer_service.list_customers(db)
    return [CustomerResponse.model_validate(c) for c in customers]


@router.post("")
async def create_customer(
    body: CustomerWrite,
    db: AsyncSession = Depends(get_db),
) -> CustomerResponse:
    customer = await customer_service.create_customer(db, body)
    return CustomerResponse.model_validate(customer)


@router.put("/{customer_id}")
async def update_customer(
    customer_id: str,
    body: CustomerWrite,
    db: AsyncSession = Depends(get_db),
) -> CustomerResponse:
    customer = await customer_service.update_customer(db, customer_id, body)
    return CustomerResponse.model_validate(customer)
