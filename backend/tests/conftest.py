import pytest
from fastapi.testclient import TestClient

from ledger.database import build_engine, build_session_factory, init_db
from ledger.main import create_app
from ledger.models.payment import Payment
from ledger.schemas.payment import PaymentCreate
from ledger.services import payment_service

SEED_PASSWORD = "Dayou123?"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "ledger.db"


@pytest.fixture
def db_url(db_path):
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
async def engine(db_url):
    engine = build_engine(db_url)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_payment(session_factory):
    """Create a payment in its own session and return it."""

    async def _make(
        date: str = "2025-01-15",
        customer_id: str = "c1",
        customer_name: str = "A Co",
        amount: str = "100.00",
    ) -> Payment:
        async with session_factory() as session:
            return await payment_service.create_payment(
                session,
                PaymentCreate(
                    date=date,
                    customer_id=customer_id,
                    customer_name=customer_name,
                    amount=amount,
                ),
            )

    return _make


@pytest.fixture
def fetch_payment(session_factory):
    """Read a payment back through a fresh session."""

    async def _fetch(payment_id: str) -> Payment | None:
        async with session_factory() as session:
            return await session.get(Payment, payment_id)

    return _fetch


@pytest.fixture
def client(db_url, monkeypatch):
    from ledger.config import settings

    monkeypatch.setattr(settings, "SEED_PASSWORD", SEED_PASSWORD)
    monkeypatch.setattr(settings, "SEED_USERNAME", "dayou")
    app = create_app(database_url=db_url, seed=True)
    with TestClient(app) as c:
        yield c
