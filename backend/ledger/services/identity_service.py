import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.database import store_errors
from ledger.errors import NotFound, Unauthorized, ValidationError
from ledger.models.account import Account
from ledger.utils.auth import burn_password_check, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


async def login(db: AsyncSession, username: str, password: str) -> Account:
    """Return the account for a valid username/password pair.

    Unknown users and wrong passwords raise the same Unauthorized error.
    """
    async with store_errors(db, "Login failed"):
        result = await db.execute(select(Account).where(Account.username == username))
        account = result.scalar_one_or_none()

    if account is None:
        await run_in_threadpool(burn_password_check, password)
        raise Unauthorized(INVALID_CREDENTIALS)
    if not await run_in_threadpool(verify_password, password, account.password_hash):
        raise Unauthorized(INVALID_CREDENTIALS)
    return account


async def rotate_credentials(
    db: AsyncSession,
    new_username: str,
    new_password: str,
    current_password: str | None = None,
) -> Account:
    """Replace username and password hash of the operator account."""
    if len(new_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    async with store_errors(db, "Failed to update account"):
        account = await db.get(Account, settings.OPERATOR_ACCOUNT_ID)
        if account is None:
            raise NotFound("Account not found")

        if settings.REQUIRE_CURRENT_PASSWORD and (
            current_password is None
            or not await run_in_threadpool(
                verify_password, current_password, account.password_hash
            )
        ):
            raise Unauthorized("Current password is incorrect")

        account.username = new_username
        account.password_hash = await run_in_threadpool(hash_password, new_password)
        await db.commit()

    logger.info("Operator credentials rotated (account %d)", account.id)
    return account
