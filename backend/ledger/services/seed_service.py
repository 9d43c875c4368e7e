import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.models.account import Account
from ledger.models.customer import Customer
from ledger.utils.auth import hash_password
from ledger.utils.ids import new_record_id

logger = logging.getLogger(__name__)


async def seed_account(
    db: AsyncSession,
    username: str | None = None,
    password: str | None = None,
) -> bool:
    """Create the operator account if no account exists. Returns True if created."""
    result = await db.execute(select(Account).limit(1))
    if result.scalar_one_or_none() is not None:
        return False

    account = Account(
        id=settings.OPERATOR_ACCOUNT_ID,
        username=username or settings.SEED_USERNAME,
        password_hash=await run_in_threadpool(
            hash_password, password or settings.SEED_PASSWORD
        ),
    )
    db.add(account)
    await db.commit()
    logger.info("Seeded operator account %r", account.username)
    return True


async def seed_customers(
    db: AsyncSession, customers: list[dict] | None = None
) -> int:
    """Insert the seed customers if the directory is empty. Returns rows added."""
    result = await db.execute(select(Customer).limit(1))
    if result.scalar_one_or_none() is not None:
        return 0

    rows = customers if customers is not None else settings.SEED_CUSTOMERS
    db.add_all([
        Customer(
            id=new_record_id(),
            name=row["name"],
            contact=row.get("contact", ""),
            phone=row.get("phone", ""),
        )
        for row in rows
    ])
    await db.commit()
    logger.info("Seeded %d customers", len(rows))
    return len(rows)


async def run_seed(db: AsyncSession) -> None:
    await seed_account(db)
    await seed_customers(db)
