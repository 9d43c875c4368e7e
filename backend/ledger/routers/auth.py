from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.database import get_db
from ledger.schemas.account import (
    AccountResponse,
    CredentialsResponse,
    CredentialsUpdate,
    LoginRequest,
)
from ledger.schemas.common import ErrorResponse
from ledger.services import identity_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", responses={401: {"model": ErrorResponse}})
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AccountResponse:
    account = await identity_service.login(db, body.username, body.password)
    return AccountResponse.model_validate(account)


@router.put("/account")
async def update_account(
    body: CredentialsUpdate,
    db: AsyncSession = Depends(get_db),
) -> CredentialsResponse:
    account = await identity_service.rotate_credentials(
        db, body.username, body.new_password, body.current_password
    )
    return CredentialsResponse(username=account.username)
