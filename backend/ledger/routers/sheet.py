from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.schemas.common import SuccessResponse
from ledger.schemas.sheet import SheetLoadResponse, SheetSaveRequest
from ledger.services import sheet_service

router = APIRouter(prefix="/sheet", tags=["sheet"])


@router.post("/save")
async def save_sheet(
    body: SheetSaveRequest,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    await sheet_service.save_sheet(db, body.sheet_data)
    return SuccessResponse()


@router.get("/load")
async def load_sheet(
    db: AsyncSession = Depends(get_db),
) -> SheetLoadResponse:
    return SheetLoadResponse(data=await sheet_service.load_sheet(db))
