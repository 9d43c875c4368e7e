import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ledger.config import settings
from ledger.database import (
    build_engine,
    build_session_factory,
    ensure_sqlite_dir,
    init_db,
)
from ledger.errors import LedgerError
from ledger.routers import auth, customers, payments, sheet
from ledger.services.seed_service import run_seed

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(database_url: str | None = None, seed: bool | None = None) -> FastAPI:
    """Build the application around its own engine.

    Each app owns its engine and session factory (on ``app.state``), so tests
    and scripts can point an app at any store without touching globals.
    """
    _configure_logging()
    url = database_url or settings.DATABASE_URL
    run_seed_step = settings.SEED_ON_STARTUP if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        ensure_sqlite_dir(url)
        engine = build_engine(url)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        await init_db(engine)
        if run_seed_step:
            async with app.state.session_factory() as session:
                await run_seed(session)
        logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
        yield
        # Shutdown
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(
            "Rejected %s %s: %d validation errors",
            request.method, request.url.path, len(exc.errors()),
        )
        return JSONResponse(status_code=422, content={"error": "Invalid request"})

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(customers.router, prefix=API_PREFIX)
    app.include_router(payments.router, prefix=API_PREFIX)
    app.include_router(sheet.router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
