import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Request
from sqlalchemy import make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ledger.config import settings
from ledger.errors import StoreError

logger = logging.getLogger(__name__)


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def ensure_sqlite_dir(url: str) -> None:
    """Create the folder holding a SQLite database file if it is missing."""
    if not is_sqlite_url(url):
        return
    database = make_url(url).database
    if database and database != ":memory:" and not database.startswith("file:"):
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def build_engine(url: str | None = None) -> AsyncEngine:
    """Create the engine for the configured store variant.

    SQLite runs as a single file with no pool sizing; server backends get a
    pre-pinged connection pool.
    """
    url = url or settings.DATABASE_URL
    if is_sqlite_url(url):
        return create_async_engine(
            url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a session from the app's own factory."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables and enable WAL mode on SQLite."""
    from ledger.models import Account, Customer, Payment, SheetData  # noqa: F401
    from ledger.models.base import Base

    async with engine.begin() as conn:
        if engine.dialect.name == "sqlite":
            await conn.execute(text("PRAGMA journal_mode=WAL"))
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def store_errors(db: AsyncSession, message: str) -> AsyncIterator[None]:
    """Roll back and raise StoreError(message) on any SQLAlchemy failure.

    The underlying error is logged here and chained, never shown to callers.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(message)
        await db.rollback()
        raise StoreError(message) from exc
