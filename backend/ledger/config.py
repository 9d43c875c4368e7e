import json
import os
from pathlib import Path


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


_DEFAULT_SEED_CUSTOMERS = [
    {"name": "Hengtai Trading Co.", "contact": "Zhang Wei", "phone": "138-0000-0001"},
    {"name": "Xinyuan Logistics", "contact": "Li Na", "phone": "138-0000-0002"},
    {"name": "Jinhai Materials", "contact": "Wang Fang", "phone": "138-0000-0003"},
]


class Settings:
    """Application settings with environment variable overrides."""

    APP_NAME: str = "Payment Ledger"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = _env_flag("DEBUG", "false")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
    DB_PATH: Path = DATA_DIR / "ledger.db"

    # Database. The URL picks the store variant:
    #   sqlite+aiosqlite:///...        embedded file
    #   postgresql+asyncpg://...       pooled server
    #   mysql+aiomysql://...           pooled server
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        f"sqlite+aiosqlite:///{DB_PATH}",
    )
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))

    # CORS
    ALLOWED_ORIGINS: list[str] = [
        o.strip()
        for o in os.getenv(
            "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173,http://localhost"
        ).split(",")
        if o.strip()
    ]

    # Seed data applied on first boot
    SEED_ON_STARTUP: bool = _env_flag("SEED_ON_STARTUP", "true")
    SEED_USERNAME: str = os.getenv("SEED_USERNAME", "dayou")
    SEED_PASSWORD: str = os.getenv("SEED_PASSWORD", "Dayou123?")
    SEED_CUSTOMERS: list[dict] = json.loads(
        os.getenv("SEED_CUSTOMERS", json.dumps(_DEFAULT_SEED_CUSTOMERS))
    )

    # Fixed keys
    OPERATOR_ACCOUNT_ID: int = 1
    SHEET_SLOT_ID: str = "sheet_main"

    # Policy switches. Everything except the verification invariant is
    # permissive by default so existing clients keep working.
    ENFORCE_VERIFICATION_INVARIANT: bool = _env_flag("ENFORCE_VERIFICATION_INVARIANT", "true")
    REQUIRE_CUSTOMER_FIELDS: bool = _env_flag("REQUIRE_CUSTOMER_FIELDS", "false")
    REQUIRE_EXISTING_CUSTOMER: bool = _env_flag("REQUIRE_EXISTING_CUSTOMER", "false")
    REJECT_NEGATIVE_AMOUNTS: bool = _env_flag("REJECT_NEGATIVE_AMOUNTS", "false")
    REQUIRE_CURRENT_PASSWORD: bool = _env_flag("REQUIRE_CURRENT_PASSWORD", "false")


settings = Settings()
